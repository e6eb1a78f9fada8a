"""Checked integer wrapper for pool arithmetic.

Reserves, shares and token amounts are plain Python ints, which never
overflow but can silently go negative or hit a zero divisor. SafeInt makes
those two failure modes loud:
- Subtraction that would go below zero raises Underflow
- Division by zero raises DivisionByZero

Usage pattern:
    from miniswap.safe_int import S

    def withdraw_amount(share: int, reserve: int, total: int) -> int:
        return (S(share) * S(reserve) // S(total)).value
"""

from __future__ import annotations


class SafeIntError(ArithmeticError):
    """Base class for SafeInt arithmetic errors."""

    pass


class DivisionByZero(SafeIntError):
    """Division by zero."""

    pass


class Underflow(SafeIntError):
    """Subtraction would produce a negative result."""

    pass


class SafeInt:
    """Non-negative-by-construction integer arithmetic.

    The wrapped value may be any int, but subtraction refuses to produce a
    negative result and floor division refuses a zero divisor. Booleans are
    rejected so that a stray flag never gets priced as 0 or 1.

    Attributes:
        value: The underlying integer value (read-only)
    """

    __slots__ = ("_value",)
    _value: int

    def __init__(self, value: int | SafeInt) -> None:
        if isinstance(value, SafeInt):
            self._value = value._value
        elif isinstance(value, int) and not isinstance(value, bool):
            self._value = value
        else:
            raise TypeError(f"SafeInt requires int, got {type(value).__name__}")

    @property
    def value(self) -> int:
        """The underlying integer value."""
        return self._value

    def __repr__(self) -> str:
        return f"SafeInt({self._value})"

    def __hash__(self) -> int:
        return hash(self._value)

    def __add__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value + _unwrap(other))

    def __radd__(self, other: int) -> SafeInt:
        return SafeInt(other + self._value)

    def __sub__(self, other: SafeInt | int) -> SafeInt:
        """Subtract other from self.

        Raises:
            Underflow: If the result would be negative
        """
        other_val = _unwrap(other)
        result = self._value - other_val
        if result < 0:
            raise Underflow(f"Underflow: {self._value} - {other_val} = {result}")
        return SafeInt(result)

    def __mul__(self, other: SafeInt | int) -> SafeInt:
        return SafeInt(self._value * _unwrap(other))

    def __rmul__(self, other: int) -> SafeInt:
        return SafeInt(other * self._value)

    def __floordiv__(self, other: SafeInt | int) -> SafeInt:
        """Floor division.

        Raises:
            DivisionByZero: If other is zero
        """
        other_val = _unwrap(other)
        if other_val == 0:
            raise DivisionByZero(f"Division by zero: {self._value} // 0")
        return SafeInt(self._value // other_val)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SafeInt):
            return self._value == other._value
        if isinstance(other, int):
            return self._value == other
        return NotImplemented

    def __lt__(self, other: SafeInt | int) -> bool:
        return self._value < _unwrap(other)

    def __le__(self, other: SafeInt | int) -> bool:
        return self._value <= _unwrap(other)

    def __gt__(self, other: SafeInt | int) -> bool:
        return self._value > _unwrap(other)

    def __ge__(self, other: SafeInt | int) -> bool:
        return self._value >= _unwrap(other)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0


def _unwrap(x: SafeInt | int) -> int:
    if isinstance(x, SafeInt):
        return x._value
    return x


# Convenience alias for concise code
S = SafeInt
