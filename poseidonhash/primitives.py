"""The Poseidon permutation, its sponge and the hash functions built on it."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from functools import cache
from itertools import chain, repeat
from typing import Iterable, Optional, Protocol, Sequence, Union

from . import bn256
from .constants import Matrix
from .field import Fr
from .grain import Grain, SboxType

Word = Union[Fr, int]


def _to_matrix(rows: Optional[Iterable[Iterable[Word]]]) -> Optional[Matrix]:
    if rows is None:
        return None
    return tuple(tuple(Fr(value) for value in row) for row in rows)


@cache
def _grain_round_constants(width: int, full_rounds: int, partial_rounds: int) -> Matrix:
    grain = Grain(SboxType.POW, width, full_rounds, partial_rounds)
    return tuple(
        tuple(grain.next_field_element() for _ in range(width))
        for _ in range(full_rounds + partial_rounds)
    )


@dataclass(frozen=True)
class Spec:
    """A Poseidon permutation: round counts, S-box exponent and constants.

    Round constants left out are derived from the Grain LFSR; the MDS matrix
    and its inverse must be supplied together.
    """

    full_rounds: int
    partial_rounds: int
    width: int = 3
    rate: int = 2
    alpha: int = 5
    round_constants: Optional[Matrix] = None
    mds: Optional[Matrix] = None
    mds_inv: Optional[Matrix] = None

    def __post_init__(self) -> None:
        if self.full_rounds < 0 or self.full_rounds % 2:
            raise ValueError("the number of full rounds must be even")
        if self.partial_rounds < 0:
            raise ValueError("the number of partial rounds must be non-negative")
        if not 0 < self.rate < self.width:
            raise ValueError("rate must be positive and smaller than the width")
        if (self.mds is None) != (self.mds_inv is None):
            raise ValueError("the MDS matrix and its inverse must be given together")
        for name in ("round_constants", "mds", "mds_inv"):
            matrix = _to_matrix(getattr(self, name))
            if matrix is not None and any(len(row) != self.width for row in matrix):
                raise ValueError(f"every row of {name} must hold {self.width} elements")
            object.__setattr__(self, name, matrix)

    def sbox(self, value: Word) -> Fr:
        """Apply the S-box x -> x^alpha."""
        return Fr(value).pow(self.alpha)

    def constants(self) -> tuple[Matrix, Matrix, Matrix]:
        """Return (round_constants, mds, mds_inv)."""
        if self.mds is None or self.mds_inv is None:
            raise ValueError("this specification carries no MDS matrix")
        round_constants = self.round_constants
        if round_constants is None:
            round_constants = _grain_round_constants(
                self.width, self.full_rounds, self.partial_rounds
            )
        return round_constants, self.mds, self.mds_inv


@cache
def p128_pow5_t3() -> Spec:
    """The 128-bit secure width-3 x^5 specification over the BN254 scalar field."""
    return Spec(
        full_rounds=8,
        partial_rounds=bn256.partial_rounds(),
        round_constants=tuple(bn256.round_constants()),
        mds=bn256.mds(),
        mds_inv=bn256.mds_inv(),
    )


def _permute(
    state: Sequence[Word], spec: Spec, mds: Matrix, round_constants: Matrix
) -> list[Fr]:
    words = [Fr(value) for value in state]
    if len(words) != spec.width:
        raise ValueError(f"state must hold {spec.width} elements, got {len(words)}")
    half = spec.full_rounds // 2
    round_kinds = chain(repeat(True, half), repeat(False, spec.partial_rounds), repeat(True, half))
    for is_full, constants in zip(round_kinds, round_constants):
        words = [word + constant for word, constant in zip(words, constants)]
        if is_full:
            words = [spec.sbox(word) for word in words]
        else:
            words[0] = spec.sbox(words[0])
        words = [sum((m * w for m, w in zip(row, words)), Fr.zero()) for row in mds]
    return words


def permute(state: Sequence[Word], spec: Spec) -> list[Fr]:
    """Run the Poseidon permutation on a state and return the new state."""
    round_constants, mds, _ = spec.constants()
    return _permute(state, spec, mds, round_constants)


class Domain(Protocol):
    """A domain in which a Poseidon hash is used."""

    def name(self) -> str: ...

    def initial_capacity_element(self) -> Fr: ...

    def padding(self, input_len: int, rate: int) -> list[Fr]: ...

    def layout(self, width: int, rate: int) -> int: ...


@dataclass(frozen=True)
class ConstantLength:
    """Hashing of a fixed number of elements, with the length in the capacity."""

    length: int

    def name(self) -> str:
        return f"ConstantLength<{self.length}>"

    def initial_capacity_element(self) -> Fr:
        # length * 2^64 + (output length - 1), with one output element.
        return Fr.from_u128(self.length << 64)

    def padding(self, input_len: int, rate: int) -> list[Fr]:
        """Zeros that fill the input up to a multiple of the rate."""
        if input_len != self.length:
            raise ValueError(f"expected {self.length} input elements, got {input_len}")
        blocks = -(-self.length // rate)
        return [Fr.zero()] * (blocks * rate - self.length)

    def layout(self, width: int, rate: int) -> int:
        return 0


@dataclass(frozen=True)
class ConstantLengthIden3:
    """Fixed-length hashing with inputs right-aligned and no capacity mark."""

    length: int

    def name(self) -> str:
        return f"ConstantLength<{self.length}> in iden3's style"

    def initial_capacity_element(self) -> Fr:
        return Fr.zero()

    def padding(self, input_len: int, rate: int) -> list[Fr]:
        return ConstantLength(self.length).padding(input_len, rate)

    def layout(self, width: int, rate: int) -> int:
        return width - rate


@dataclass(frozen=True)
class VariableLengthIden3:
    """Variable-length hashing with inputs right-aligned and a caller-given capacity."""

    def name(self) -> str:
        return "VariableLength in iden3's style"

    def initial_capacity_element(self) -> Fr:
        return ConstantLengthIden3(1).initial_capacity_element()

    def padding(self, input_len: int, rate: int) -> list[Fr]:
        remainder = input_len % rate
        return [Fr.zero()] * (rate - remainder if remainder else 0)

    def layout(self, width: int, rate: int) -> int:
        return ConstantLengthIden3(1).layout(width, rate)


class Sponge:
    """A Poseidon duplex sponge: absorb elements, then squeeze them out."""

    def __init__(self, spec: Spec, initial_capacity_element: Word, layout: int = 0) -> None:
        if not 0 <= layout <= spec.width - spec.rate:
            raise ValueError(f"layout {layout} leaves no room for the rate")
        self._spec = spec
        self._round_constants, self._mds, _ = spec.constants()
        self._layout = layout
        self._capacity_index = (spec.rate + layout) % spec.width
        self._state = [Fr.zero()] * spec.width
        self._state[self._capacity_index] = Fr(initial_capacity_element)
        self._pending: Optional[list[Optional[Fr]]] = [None] * spec.rate
        self._output: Optional[deque[Fr]] = None

    def _absorbing_buffer(self) -> list[Optional[Fr]]:
        if self._pending is None:
            raise RuntimeError("the sponge has finished absorbing")
        return self._pending

    def _duplex(self, block: Optional[Sequence[Optional[Fr]]]) -> list[Fr]:
        if block is not None:
            positions = range(self._layout, self._spec.width)
            for index, value in zip(positions, block):
                if value is None:
                    raise ValueError("sponge input is not padded to the rate")
                self._state[index] += value
        self._state = _permute(self._state, self._spec, self._mds, self._round_constants)
        return self._state[: self._spec.rate]

    def update_capacity(self, capacity_element: Word) -> None:
        """Add an element to the capacity word."""
        self._absorbing_buffer()
        self._state[self._capacity_index] += Fr(capacity_element)

    def absorb(self, value: Word) -> None:
        """Absorb one element, permuting when the rate is full."""
        buffer = self._absorbing_buffer()
        try:
            slot = buffer.index(None)
        except ValueError:
            self._duplex(buffer)
            self._pending = [Fr(value)] + [None] * (self._spec.rate - 1)
        else:
            buffer[slot] = Fr(value)

    def finish_absorbing(self) -> Sponge:
        """Absorb the last block and switch to squeezing; returns the sponge."""
        buffer = self._absorbing_buffer()
        self._output = deque(self._duplex(buffer))
        self._pending = None
        return self

    def squeeze(self) -> Fr:
        """Return the next output element, permuting when none are left."""
        if self._output is None:
            raise RuntimeError("the sponge is still absorbing")
        if not self._output:
            self._output.extend(self._duplex(None))
        return self._output.popleft()


class Hash:
    """A Poseidon hash function for one specification and domain."""

    def __init__(self, spec: Spec, domain: Domain) -> None:
        self.spec = spec
        self.domain = domain
        self._round_constants, self._mds, _ = spec.constants()
        self._layout = domain.layout(spec.width, spec.rate)

    def __repr__(self) -> str:
        return (
            f"Hash(width={self.spec.width}, rate={self.spec.rate}, "
            f"R_F={self.spec.full_rounds}, R_P={self.spec.partial_rounds}, "
            f"domain={self.domain.name()!r})"
        )

    def _sponge(self) -> Sponge:
        return Sponge(self.spec, self.domain.initial_capacity_element(), self._layout)

    def permute(self, state: Sequence[Word]) -> list[Fr]:
        """Run the permutation of this hash's specification on a state."""
        return _permute(state, self.spec, self._mds, self._round_constants)

    def hash(self, message: Iterable[Word]) -> Fr:
        """Hash a fixed-length message."""
        if not isinstance(self.domain, (ConstantLength, ConstantLengthIden3)):
            raise TypeError(f"{self.domain.name()} does not hash fixed-length messages")
        words = [Fr(value) for value in message]
        padding = self.domain.padding(len(words), self.spec.rate)
        sponge = self._sponge()
        for value in chain(words, padding):
            sponge.absorb(value)
        return sponge.finish_absorbing().squeeze()

    def hash_with_cap(self, message: Iterable[Word], cap: int) -> Fr:
        """Hash a message of any length, adding `cap` to the capacity first."""
        if not isinstance(self.domain, VariableLengthIden3):
            raise TypeError(f"{self.domain.name()} does not take a capacity")
        words = [Fr(value) for value in message]
        sponge = self._sponge()
        sponge.update_capacity(Fr.from_u128(cap))
        for value in chain(words, self.domain.padding(len(words), self.spec.rate)):
            sponge.absorb(value)
        return sponge.finish_absorbing().squeeze()