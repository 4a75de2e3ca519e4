import random

import pytest

from hierarchical_fold import M31, QM31, modulus


@pytest.fixture
def rng():
    return random.Random(1337)


@pytest.fixture
def mk_inputs(rng):
    def _mk_inputs(log_size):
        values = [M31(rng.randrange(modulus)) for _ in range(1 << log_size)]
        folding_factors = [
            QM31([rng.randrange(modulus) for _ in range(4)])
            for _ in range(log_size)
        ]
        return values, folding_factors
    return _mk_inputs


@pytest.fixture
def example_values():
    return [M31(x) for x in [1, 2, 3, 4, 5, 6, 7, 8]]


@pytest.fixture
def example_factors():
    return [QM31.from_m31(x, 0, 0, 0) for x in [2, 3, 4]]
