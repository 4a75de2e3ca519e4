def is_power_of_two(x):
    return x > 0 and x & (x-1) == 0

def log2(x):
    assert is_power_of_two(x)
    return x.bit_length() - 1

# Evaluates a fold directly from its closed form: value i is weighted by
# the product of the factors selected by the bits of i, where the top bit
# of i selects the first factor and the bottom bit selects the last one.
# Quadratic-ish, only meant for cross-checking.
def fold_reference(values, folding_factors, ext):
    k = len(folding_factors)
    o = ext(0)
    for i, value in enumerate(values):
        weight = ext(1)
        for j, factor in enumerate(folding_factors):
            if (i >> (k - 1 - j)) & 1:
                weight = weight * factor
        o = o + weight * value
    return o
