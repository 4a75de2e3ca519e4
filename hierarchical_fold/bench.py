import random
import sys
import time

from .fields import M31, QM31, modulus
from .fold import fold
from .backends import BACKENDS, get_backend
from .utils import fold_reference

REFERENCE_LIMIT = 2**10

def mk_inputs(log_size, seed=42):
    rng = random.Random(seed)
    values = [M31(rng.randrange(modulus)) for _ in range(1 << log_size)]
    folding_factors = [
        QM31([rng.randrange(modulus) for _ in range(4)])
        for _ in range(log_size)
    ]
    return values, folding_factors

def bench(log_size, names=None):
    values, folding_factors = mk_inputs(log_size)
    print("Folding {} values with {} factors".format(
        len(values), len(folding_factors)
    ))
    t0 = time.time()
    expected = fold(values, folding_factors)
    print("fold: {} in {:.4f} sec".format(expected, time.time() - t0))
    if len(values) <= REFERENCE_LIMIT:
        assert fold_reference(values, folding_factors, QM31) == expected
        print("Matches closed form")
    for name in names or sorted(BACKENDS):
        backend = get_backend(name)
        t0 = time.time()
        result = backend.fold(values, folding_factors)
        print("{}: {} in {:.4f} sec".format(name, result, time.time() - t0))
        assert result == expected, "{} backend disagrees".format(name)
    print("All backends agree")

if __name__ == '__main__':
    log_sizes = [int(x) for x in sys.argv[1:] if x.isdigit()]
    names = [x for x in sys.argv[1:] if x in BACKENDS]
    for log_size in log_sizes or [4, 10, 16]:
        bench(log_size, names)
