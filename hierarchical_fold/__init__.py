from .fields import M31, CM31, QM31, modulus
from .fold import fold, check_fold_args, PreconditionViolation
from .backends import (
    Backend, SequentialBackend, ThreadedBackend, NumpyBackend,
    get_backend, select_backend, fold_accelerated,
    ACCELERATION_THRESHOLD, PARALLEL_DEPTH
)
from .utils import log2, is_power_of_two, fold_reference
