"""Arithmetic in the scalar field of the BN254 curve."""

from __future__ import annotations

from typing import Union

MODULUS = 0x30644E72E131A029B85045B68181585D2833E84879B9709143E1F593F0000001
NUM_BITS = 254
REPR_BYTES = 32
WIDE_BYTES = 64

_DECIMAL_DIGITS = frozenset("0123456789")

Operand = Union["Fr", int]


class Fr:
    """An immutable element of the BN254 scalar field."""

    __slots__ = ("_value",)

    MODULUS = MODULUS
    NUM_BITS = NUM_BITS

    def __init__(self, value: Operand = 0) -> None:
        if isinstance(value, Fr):
            value = value._value
        elif isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"cannot build a field element from {type(value).__name__}")
        self._value = value % MODULUS

    @classmethod
    def zero(cls) -> Fr:
        return cls(0)

    @classmethod
    def one(cls) -> Fr:
        return cls(1)

    @classmethod
    def from_u128(cls, value: int) -> Fr:
        """Build an element from an unsigned 128-bit integer."""
        if not 0 <= value < 1 << 128:
            raise ValueError(f"{value} does not fit in 128 unsigned bits")
        return cls(value)

    @classmethod
    def from_str(cls, text: str) -> Fr:
        """Parse a decimal string; leading zeros and signs are rejected."""
        if not text:
            raise ValueError("empty string is not a field element")
        if text == "0":
            return cls.zero()
        if not set(text) <= _DECIMAL_DIGITS:
            raise ValueError(f"{text!r} is not a decimal number")
        if text[0] == "0":
            raise ValueError(f"{text!r} has a leading zero")
        return cls(int(text))

    @classmethod
    def from_repr(cls, data: bytes) -> Fr:
        """Decode the canonical 32-byte little-endian representation."""
        if len(data) != REPR_BYTES:
            raise ValueError(f"expected {REPR_BYTES} bytes, got {len(data)}")
        value = int.from_bytes(bytes(data), "little")
        if value >= MODULUS:
            raise ValueError("representation is not canonical")
        return cls(value)

    @classmethod
    def from_bytes_wide(cls, data: bytes) -> Fr:
        """Reduce a 64-byte little-endian integer into the field."""
        if len(data) != WIDE_BYTES:
            raise ValueError(f"expected {WIDE_BYTES} bytes, got {len(data)}")
        return cls(int.from_bytes(bytes(data), "little"))

    def to_repr(self) -> bytes:
        """Return the canonical 32-byte little-endian representation."""
        return self._value.to_bytes(REPR_BYTES, "little")

    def invert(self) -> Fr:
        """Return the multiplicative inverse; zero has none."""
        if self._value == 0:
            raise ZeroDivisionError("zero has no multiplicative inverse")
        return Fr(pow(self._value, -1, MODULUS))

    def pow(self, exponent: int) -> Fr:
        """Raise to a non-negative integer power."""
        if exponent < 0:
            raise ValueError("exponent must be non-negative")
        return Fr(pow(self._value, exponent, MODULUS))

    def is_zero(self) -> bool:
        return self._value == 0

    @staticmethod
    def _coerce(other: object) -> int | None:
        if isinstance(other, Fr):
            return other._value
        if isinstance(other, int) and not isinstance(other, bool):
            return other % MODULUS
        return None

    def __add__(self, other: Operand) -> Fr:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return Fr(self._value + value)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Fr:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return Fr(self._value - value)

    def __rsub__(self, other: Operand) -> Fr:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return Fr(value - self._value)

    def __mul__(self, other: Operand) -> Fr:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return Fr(self._value * value)

    __rmul__ = __mul__

    def __truediv__(self, other: Operand) -> Fr:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self * Fr(value).invert()

    def __neg__(self) -> Fr:
        return Fr(-self._value)

    def __pow__(self, exponent: int) -> Fr:
        return self.pow(exponent)

    def __eq__(self, other: object) -> bool:
        value = self._coerce(other)
        if value is None:
            return NotImplemented
        return self._value == value

    def __hash__(self) -> int:
        return hash(self._value)

    def __int__(self) -> int:
        return self._value

    def __bool__(self) -> bool:
        return self._value != 0

    def __repr__(self) -> str:
        return f"0x{self._value:064x}"

    __str__ = __repr__