import concurrent.futures

import numpy as np
import pytest

from hierarchical_fold import (
    M31, QM31, fold, fold_accelerated, PreconditionViolation,
    SequentialBackend, ThreadedBackend, NumpyBackend,
    get_backend, select_backend, ACCELERATION_THRESHOLD
)
from hierarchical_fold import m31_numpy

BACKENDS = [
    SequentialBackend(),
    ThreadedBackend(),
    ThreadedBackend(depth=5, max_workers=4),
    NumpyBackend(),
]


@pytest.fixture(params=BACKENDS, ids=repr)
def backend(request):
    return request.param


@pytest.mark.parametrize('log_size', range(9))
def test_backend_matches_fold(backend, mk_inputs, log_size):
    values, folding_factors = mk_inputs(log_size)
    assert backend.fold(values, folding_factors) == fold(values, folding_factors)


def test_backend_concrete_example(backend, example_values, example_factors):
    assert backend.fold(example_values, example_factors) == 358


def test_backend_single_value(backend):
    result = backend.fold([M31(5)], [])
    assert isinstance(result, QM31)
    assert result == QM31(5)


def test_backend_rejects_bad_sizes(backend):
    with pytest.raises(PreconditionViolation):
        backend.fold([M31(x) for x in range(6)], [QM31(2)] * 3)
    with pytest.raises(PreconditionViolation):
        backend.fold([M31(x) for x in range(8)], [QM31(2)] * 2)


def test_process_pool_backend(mk_inputs):
    values, folding_factors = mk_inputs(6)
    backend = ThreadedBackend(
        depth=1,
        max_workers=2,
        executor_cls=concurrent.futures.ProcessPoolExecutor
    )
    assert backend.fold(values, folding_factors) == fold(values, folding_factors)


def test_numpy_backend_extension_values(mk_inputs, rng):
    values, folding_factors = mk_inputs(5)
    values = [QM31([rng.randrange(2**31 - 1) for _ in range(4)]) for _ in values]
    assert NumpyBackend().fold(values, folding_factors) == fold(values, folding_factors)


def test_numpy_backend_falls_back(example_values):
    backend = NumpyBackend()
    factors = [M31(2), M31(3), M31(4)]
    assert not backend.supports(example_values, factors, ext=M31)
    result = backend.fold(example_values, factors, ext=M31)
    assert isinstance(result, M31)
    assert result == 358


def test_qm31_mul_matches_scalar(rng):
    xs = [QM31([rng.randrange(2**31 - 1) for _ in range(4)]) for _ in range(16)]
    y = QM31([rng.randrange(2**31 - 1) for _ in range(4)])
    products = m31_numpy.qm31_mul(m31_numpy.to_array(xs), m31_numpy.to_array([y])[0])
    assert products.shape == (16, 4)
    assert products.dtype == np.uint64
    assert [m31_numpy.from_array(row) for row in products] == [x * y for x in xs]


def test_select_backend(mk_inputs):
    small_values, small_factors = mk_inputs(3)
    assert isinstance(select_backend(small_values, small_factors), SequentialBackend)
    log_size = ACCELERATION_THRESHOLD.bit_length() - 1
    values, folding_factors = mk_inputs(log_size)
    assert isinstance(select_backend(values, folding_factors), NumpyBackend)
    m31_factors = [M31(int(f.value[0])) for f in folding_factors]
    assert isinstance(select_backend(values, m31_factors, ext=M31), SequentialBackend)


def test_fold_accelerated_matches_fold(mk_inputs):
    for log_size in [0, 3, 11]:
        values, folding_factors = mk_inputs(log_size)
        assert fold_accelerated(values, folding_factors) == fold(values, folding_factors)


def test_fold_accelerated_explicit_backend(example_values, example_factors):
    result = fold_accelerated(example_values, example_factors, backend=ThreadedBackend(depth=1))
    assert result == 358


def test_fold_accelerated_rejects_bad_sizes():
    with pytest.raises(PreconditionViolation):
        fold_accelerated([M31(x) for x in range(6)], [QM31(2)] * 3)
    with pytest.raises(PreconditionViolation):
        fold_accelerated([], [])


def test_get_backend():
    assert isinstance(get_backend('numpy'), NumpyBackend)
    assert get_backend('threaded', depth=3).depth == 3
    with pytest.raises(ValueError):
        get_backend('gpu')


def test_threaded_backend_rejects_negative_depth():
    with pytest.raises(ValueError):
        ThreadedBackend(depth=-1)
