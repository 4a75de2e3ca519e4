from .fields import QM31
from .utils import is_power_of_two, log2


class PreconditionViolation(AssertionError):
    """Raised when a fold is called with mismatched sizes.

    This signals a bug in the caller, which is expected to have set up the
    domain so that there are exactly 2**k values for k folding factors.
    """


def check_fold_args(values, folding_factors):
    if not is_power_of_two(len(values)):
        raise PreconditionViolation(
            "Fold needs a power-of-two number of values, got {}".format(
                len(values)
            )
        )
    if log2(len(values)) != len(folding_factors):
        raise PreconditionViolation(
            "Folding {} values needs {} factors, got {}".format(
                len(values), log2(len(values)), len(folding_factors)
            )
        )


def fold(values, folding_factors, ext=QM31):
    """Folds values recursively in O(n) by a hierarchical application of
    folding factors.

    Folding n = 8 values with folding_factors = [x, y, z]:

                      n0 = n1 + x*n2
                  /                   \\
          n1 = n3 + y*n4          n2 = n5 + y*n6
           /         \\             /         \\
     n3 = a+z*b  n4 = c+z*d  n5 = e+z*f  n6 = g+z*h
       /  \\        /  \\        /  \\        /  \\
      a    b      c    d      e    f      g    h

    The first factor is applied at the top, the last one right above the
    leaves. `ext` embeds a single value into the extension field, and is
    what the result of folding one value with no factors looks like.

    Raises PreconditionViolation unless len(values) == 2**len(folding_factors).
    """
    check_fold_args(values, folding_factors)
    return _fold(values, 0, len(values), folding_factors, 0, ext)


# Folds values[start:start+size] with folding_factors[level:], without
# copying either sequence
def _fold(values, start, size, folding_factors, level, ext):
    if size != 1 << (len(folding_factors) - level):
        raise PreconditionViolation(
            "Folding level {} holds {} values, expected {}".format(
                level, size, 1 << (len(folding_factors) - level)
            )
        )
    if size == 1:
        return ext(values[start])
    half = size // 2
    lhs_val = _fold(values, start, half, folding_factors, level + 1, ext)
    rhs_val = _fold(values, start + half, half, folding_factors, level + 1, ext)
    return lhs_val + rhs_val * folding_factors[level]
