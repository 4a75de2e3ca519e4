"""Execution strategies for the hierarchical fold.

Every backend computes exactly what `fold` computes and raises the same
PreconditionViolation on the same inputs; they only differ in how the work
is scheduled.
"""
import concurrent.futures

from .fields import M31, QM31
from .fold import fold, check_fold_args
from . import m31_numpy

# Inputs at least this long go to the vectorized backend when it can
# handle them
ACCELERATION_THRESHOLD = 2**10
# Number of top levels the threaded backend forks into independent subtrees
PARALLEL_DEPTH = 2


class Backend():
    name = None

    def supports(self, values, folding_factors, ext=QM31):
        return True

    def fold(self, values, folding_factors, ext=QM31):
        check_fold_args(values, folding_factors)
        if not self.supports(values, folding_factors, ext):
            return fold(values, folding_factors, ext)
        return self._fold(values, folding_factors, ext)

    def _fold(self, values, folding_factors, ext):
        raise NotImplementedError

    def __repr__(self):
        return '<{} backend>'.format(self.name)


class SequentialBackend(Backend):
    name = 'sequential'

    def _fold(self, values, folding_factors, ext):
        return fold(values, folding_factors, ext)


class ThreadedBackend(Backend):
    """Folds the 2**depth subtrees below the top `depth` levels in an
    executor, then joins them with the top factors.

    Pass `executor_cls=concurrent.futures.ProcessPoolExecutor` to get real
    parallelism on CPython; field elements and `fold` pickle fine.
    """
    name = 'threaded'

    def __init__(self, depth=PARALLEL_DEPTH, max_workers=None,
                 executor_cls=concurrent.futures.ThreadPoolExecutor):
        if depth < 0:
            raise ValueError("depth must be non-negative, got {}".format(depth))
        self.depth = depth
        self.max_workers = max_workers
        self.executor_cls = executor_cls

    def _fold(self, values, folding_factors, ext):
        depth = min(self.depth, len(folding_factors))
        if depth == 0:
            return fold(values, folding_factors, ext)
        size = len(values) >> depth
        lower_factors = folding_factors[depth:]
        with self.executor_cls(max_workers=self.max_workers) as executor:
            futures = [
                executor.submit(fold, values[i:i+size], lower_factors, ext)
                for i in range(0, len(values), size)
            ]
            layer = [future.result() for future in futures]
        # Join adjacent subtrees, innermost of the top factors first
        for folding_factor in reversed(folding_factors[:depth]):
            layer = [
                layer[i] + layer[i+1] * folding_factor
                for i in range(0, len(layer), 2)
            ]
        return layer[0]


class NumpyBackend(Backend):
    """Bottom-up fold over whole layers at once.

    Each round pairs up adjacent entries and combines them with the
    innermost remaining factor, which is the same tree as the recursive
    fold walked from the leaves up. Only understands M31 / QM31.
    """
    name = 'numpy'

    def supports(self, values, folding_factors, ext=QM31):
        return (
            ext is QM31
            and all(isinstance(v, (M31, QM31)) for v in values)
            and all(isinstance(f, (M31, QM31)) for f in folding_factors)
        )

    def _fold(self, values, folding_factors, ext):
        vals = m31_numpy.to_array(values)
        factors = m31_numpy.to_array(folding_factors)
        for factor in factors[::-1]:
            vals = vals.reshape((vals.shape[0] // 2, 2, 4))
            vals = m31_numpy.add(
                vals[:, 0],
                m31_numpy.qm31_mul(vals[:, 1], factor)
            )
        return m31_numpy.from_array(vals[0])


SEQUENTIAL = SequentialBackend()
NUMPY = NumpyBackend()

BACKENDS = {
    'sequential': SequentialBackend,
    'threaded': ThreadedBackend,
    'numpy': NumpyBackend,
}


def get_backend(name, **kwargs):
    if name not in BACKENDS:
        raise ValueError("Unknown backend {}, expected one of {}".format(
            name, sorted(BACKENDS)
        ))
    return BACKENDS[name](**kwargs)


def select_backend(values, folding_factors, ext=QM31,
                   threshold=ACCELERATION_THRESHOLD):
    if len(values) >= threshold and NUMPY.supports(values, folding_factors, ext):
        return NUMPY
    return SEQUENTIAL


def fold_accelerated(values, folding_factors, ext=QM31, backend=None):
    """Same contract and result as `fold`; large M31/QM31 inputs are routed
    to the vectorized backend unless `backend` picks one explicitly."""
    check_fold_args(values, folding_factors)
    if backend is None:
        backend = select_backend(values, folding_factors, ext)
    return backend.fold(values, folding_factors, ext)
