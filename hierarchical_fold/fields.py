modulus = 2**31 - 1

class M31():
    modulus = modulus

    def __init__(self, value):
        if isinstance(value, self.__class__):
            value = value.value
        self.value = value % self.modulus

    # Returns the raw integer behind an operand, or None if the operand
    # belongs to a bigger field (which then handles the operation itself)
    def _other_value(self, other):
        if isinstance(other, M31):
            return other.value
        elif isinstance(other, int):
            return other % self.modulus
        return None

    def __add__(self, other):
        othervalue = self._other_value(other)
        if othervalue is None:
            return NotImplemented
        return self.__class__(self.value + othervalue)

    def __sub__(self, other):
        othervalue = self._other_value(other)
        if othervalue is None:
            return NotImplemented
        return self.__class__(self.value - othervalue)

    def __rsub__(self, other):
        othervalue = self._other_value(other)
        if othervalue is None:
            return NotImplemented
        return self.__class__(othervalue - self.value)

    def __neg__(self):
        return self.__class__(self.modulus - (self.value or self.modulus))

    def __mul__(self, other):
        othervalue = self._other_value(other)
        if othervalue is None:
            return NotImplemented
        return self.__class__(self.value * othervalue)

    __radd__ = __add__
    __rmul__ = __mul__

    def __pow__(self, other):
        return self.__class__(pow(self.value, other, self.modulus))

    def inv(self):
        if self.value == 0:
            raise ZeroDivisionError("M31 zero has no inverse")
        return self.__class__(pow(self.value, -1, self.modulus))

    def __truediv__(self, other):
        if isinstance(other, int):
            other = self.__class__(other)
        if not isinstance(other, M31):
            return NotImplemented
        return self * other.inv()

    def __eq__(self, other):
        othervalue = self._other_value(other)
        if othervalue is None:
            return NotImplemented
        return self.value == othervalue

    def __hash__(self):
        return hash(self.value)

    def __int__(self):
        return self.value

    def __repr__(self):
        return '<'+str(self.value)+'>'

    def to_bytes(self):
        return self.value.to_bytes(4, 'little')

    @classmethod
    def from_bytes(cls, bytez):
        return cls(int.from_bytes(bytez, 'little'))

# Complex extension: a + b*i with i^2 = -1
class CM31():
    def __init__(self, value):
        self.value = self._to_list(value)

    def _to_list(self, value):
        if isinstance(value, self.__class__):
            return value.value
        elif isinstance(value, (int, M31)):
            return [M31(value), M31(0)]
        elif isinstance(value, (list, tuple)) and len(value) == 2:
            return [M31(v) for v in value]
        raise TypeError("Incompatible value: {}".format(value))

    def __add__(self, other):
        o = self._to_list(other)
        return self.__class__([x+y for x,y in zip(self.value, o)])

    def __sub__(self, other):
        o = self._to_list(other)
        return self.__class__([x-y for x,y in zip(self.value, o)])

    def __neg__(self):
        return self.__class__([-x for x in self.value])

    def __mul__(self, other):
        if isinstance(other, (int, M31)):
            return self.__class__([x*other for x in self.value])
        a, b = self.value
        c, d = self._to_list(other)
        return self.__class__([a*c - b*d, a*d + b*c])

    __radd__ = __add__
    __rmul__ = __mul__

    def inv(self):
        a, b = self.value
        inv_norm = (a*a + b*b).inv()
        return self.__class__([a * inv_norm, -b * inv_norm])

    def __eq__(self, other):
        if not isinstance(other, (int, M31, CM31, list, tuple)):
            return NotImplemented
        return self.value == self._to_list(other)

    def __hash__(self):
        return hash(tuple(x.value for x in self.value))

    def __repr__(self):
        return '<'+str([v.value for v in self.value])+'>'

# u^2 = 2 + i
R = CM31([2, 1])

# Degree-4 extension: (a + b*i) + (c + d*i)*u, stored as [a, b, c, d]
class QM31():
    def __init__(self, value):
        self.value = self._to_list(value)

    @classmethod
    def from_m31(cls, a, b, c, d):
        return cls([a, b, c, d])

    def _to_list(self, value):
        if isinstance(value, self.__class__):
            return value.value
        elif isinstance(value, (int, M31)):
            return [M31(value)] + [M31(0)]*3
        elif isinstance(value, (list, tuple)) and len(value) == 4:
            return [M31(v) for v in value]
        raise TypeError("Incompatible value: {}".format(value))

    def _halves(self):
        a, b, c, d = self.value
        return CM31([a, b]), CM31([c, d])

    @classmethod
    def _from_halves(cls, lo, hi):
        return cls(lo.value + hi.value)

    def __add__(self, other):
        o = self._to_list(other)
        return self.__class__([x+y for x,y in zip(self.value, o)])

    def __sub__(self, other):
        o = self._to_list(other)
        return self.__class__([x-y for x,y in zip(self.value, o)])

    def __rsub__(self, other):
        return -self + other

    def __neg__(self):
        return self.__class__([-x for x in self.value])

    def __mul__(self, other):
        if isinstance(other, (int, M31)):
            return self.__class__([x*other for x in self.value])
        x0, x1 = self._halves()
        y0, y1 = self.__class__(other)._halves()
        return self._from_halves(
            x0*y0 + x1*y1*R,
            x0*y1 + x1*y0
        )

    __radd__ = __add__
    __rmul__ = __mul__

    def __pow__(self, other):
        o = self.__class__(1)
        base = self
        while other > 0:
            if other & 1:
                o = o * base
            base = base * base
            other >>= 1
        return o

    # (x0 + x1*u)^-1 = (x0 - x1*u) / (x0^2 - x1^2 * R)
    def inv(self):
        x0, x1 = self._halves()
        denom_inv = (x0*x0 - x1*x1*R).inv()
        return self._from_halves(x0 * denom_inv, -x1 * denom_inv)

    def __truediv__(self, other):
        if isinstance(other, (int, M31)):
            return self * M31(other).inv()
        return self * self.__class__(other).inv()

    def __eq__(self, other):
        if not isinstance(other, (int, M31, QM31, list, tuple)):
            return NotImplemented
        return self.value == self._to_list(other)

    def __hash__(self):
        return hash(tuple(x.value for x in self.value))

    def __repr__(self):
        return '<'+str([v.value for v in self.value])+'>'

    def to_bytes(self):
        return b''.join([v.to_bytes() for v in self.value])

    @classmethod
    def from_bytes(cls, bytez):
        return cls([
            int.from_bytes(bytez[i:i+4], 'little') for i in range(0, 16, 4)
        ])
