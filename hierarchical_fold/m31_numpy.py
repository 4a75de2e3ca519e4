import numpy as np

from .fields import M31, QM31, modulus

# Arrays hold reduced values (< 2**31) in uint64, so a single product
# (< 2**62) never overflows before it is reduced
modulus64 = np.uint64(modulus)

def add(x, y):
    return (x + y) % modulus64

def sub(x, y):
    return (x + modulus64 - y) % modulus64

def mul(x, y):
    return (x * y) % modulus64

# (a0 + a1*i) * (b0 + b1*i), coordinates given separately
def cm31_mul(a0, a1, b0, b1):
    return (
        sub(mul(a0, b0), mul(a1, b1)),
        add(mul(a0, b1), mul(a1, b0))
    )

# Multiplies QM31 elements packed as (..., 4) arrays [a, b, c, d] meaning
# (a + b*i) + (c + d*i)*u, with u^2 = 2 + i. Broadcasts like numpy does, so
# a (4,) array multiplies every row of an (m, 4) array.
def qm31_mul(x, y):
    x0, x1, x2, x3 = x[..., 0], x[..., 1], x[..., 2], x[..., 3]
    y0, y1, y2, y3 = y[..., 0], y[..., 1], y[..., 2], y[..., 3]
    l0, l1 = cm31_mul(x0, x1, y0, y1)
    r0, r1 = cm31_mul(x2, x3, y2, y3)
    # (r0 + r1*i) * (2 + i)
    rr0 = sub(add(r0, r0), r1)
    rr1 = add(r0, add(r1, r1))
    c0, c1 = cm31_mul(x0, x1, y2, y3)
    d0, d1 = cm31_mul(x2, x3, y0, y1)
    return np.stack(
        (add(l0, rr0), add(l1, rr1), add(c0, d0), add(c1, d1)),
        axis=-1
    )

# Lifts a list of M31 / QM31 elements into an (n, 4) array
def to_array(values):
    o = np.zeros((len(values), 4), dtype=np.uint64)
    if all(isinstance(v, M31) for v in values):
        o[:, 0] = np.array([v.value for v in values], dtype=np.uint64)
        return o
    for i, v in enumerate(values):
        o[i] = [x.value for x in QM31(v).value]
    return o

def from_array(row):
    return QM31([int(x) for x in row])
