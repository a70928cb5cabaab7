"""The Grain LFSR in self-shrinking mode, used to derive Poseidon constants."""

from __future__ import annotations

from enum import IntEnum
from itertools import islice
from typing import Iterator

from .field import MODULUS, Fr

_STATE_BITS = 80
_DISCARDED_BYTES = 20


class FieldType(IntEnum):
    """Kind of field the parameters are generated for; the value is its tag."""

    BINARY = 0
    PRIME_ORDER = 1


class SboxType(IntEnum):
    """Kind of S-box; the value is its tag."""

    POW = 0
    INV = 1


class Grain:
    """An endless stream of bits from the Grain LFSR, and field elements drawn from it."""

    def __init__(self, sbox: SboxType, t: int, r_f: int, r_p: int) -> None:
        state = [True] * _STATE_BITS

        def set_bits(offset: int, length: int, value: int) -> None:
            # Bits are laid out most significant first.
            for i in range(length):
                state[offset + length - 1 - i] = bool((value >> i) & 1)

        set_bits(0, 2, FieldType.PRIME_ORDER.value)
        set_bits(2, 4, SboxType(sbox).value)
        set_bits(6, 12, Fr.NUM_BITS)
        set_bits(18, 12, t)
        set_bits(30, 10, r_f)
        set_bits(40, 10, r_p)

        self._state = state
        self._next_bit = _STATE_BITS

        for _ in range(_DISCARDED_BYTES):
            self._load_next_8_bits()
            self._next_bit = _STATE_BITS

    def _load_next_8_bits(self) -> None:
        s = self._state
        new_bits = [
            s[i + 62] ^ s[i + 51] ^ s[i + 38] ^ s[i + 23] ^ s[i + 13] ^ s[i]
            for i in range(8)
        ]
        self._state = s[8:] + s[:8]
        self._next_bit -= 8
        self._state[self._next_bit : self._next_bit + 8] = new_bits

    def _get_next_bit(self) -> bool:
        if self._next_bit == _STATE_BITS:
            self._load_next_8_bits()
        bit = self._state[self._next_bit]
        self._next_bit += 1
        return bit

    def __iter__(self) -> Iterator[bool]:
        return self

    def __next__(self) -> bool:
        # Bits come in pairs: a leading 1 emits the second bit, a leading 0 drops it.
        while not self._get_next_bit():
            self._get_next_bit()
        return self._get_next_bit()

    def _next_candidate(self) -> int:
        value = 0
        for bit in islice(self, Fr.NUM_BITS):
            value = (value << 1) | int(bit)
        return value

    def next_field_element(self) -> Fr:
        """Draw the next field element, rejecting candidates outside the field."""
        while True:
            candidate = self._next_candidate()
            if candidate < MODULUS:
                return Fr(candidate)

    def next_field_element_without_rejection(self) -> Fr:
        """Draw the next field element, reducing the candidate into the field."""
        return Fr(self._next_candidate())