"""Poseidon hashing of field pairs and messages, and the table of hashes to prove."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import Iterable, Iterator, Optional, Sequence, Union

from .field import Fr
from .primitives import (
    ConstantLengthIden3,
    Hash,
    VariableLengthIden3,
    p128_pow5_t3,
)

Word = Union[Fr, int]

HASHABLE_DOMAIN_SPEC = 1 << 64
"""The factor applied to a message length to form the capacity in var-len mode."""

DEFAULT_STEP = 62
"""A default step, compatible with the code-hash circuit."""


def hasher() -> Hash:
    """Return a hasher for pairs of field elements (two elements to one)."""
    return Hash(p128_pow5_t3(), ConstantLengthIden3(2))


def msg_hasher() -> Hash:
    """Return a hasher for messages of any length."""
    return Hash(p128_pow5_t3(), VariableLengthIden3())


def hash_pair(inputs: Sequence[Word]) -> Fr:
    """Hash exactly two field elements into one."""
    words = [Fr(value) for value in inputs]
    if len(words) != 2:
        raise ValueError(f"expected 2 elements to hash, got {len(words)}")
    return hasher().hash(words)


def hash_msg(msg: Sequence[Word], cap: Optional[int] = None) -> Fr:
    """Hash a message; the capacity defaults to its length times 2^64."""
    words = [Fr(value) for value in msg]
    if cap is None:
        cap = len(words) * HASHABLE_DOMAIN_SPEC
    return msg_hasher().hash_with_cap(words, cap)


def hash_block_size() -> int:
    """Return the circuit rows consumed by each hash block."""
    spec = p128_pow5_t3()
    return 1 + spec.full_rounds + (spec.partial_rounds + 1) // 2


def _pair(values: Iterable[Word]) -> tuple[Fr, Fr]:
    words = tuple(Fr(value) for value in values)
    if len(words) != 2:
        raise ValueError(f"an input must hold 2 elements, got {len(words)}")
    return words  # type: ignore[return-value]


def _control_series(ctrl_start: int, step: int) -> Iterator[int]:
    current = ctrl_start
    while True:
        yield current
        if current <= step:
            return
        current -= step


@dataclass
class PoseidonHashTable:
    """The inputs, control flags and expected outputs of a batch of hashes."""

    inputs: list[tuple[Fr, Fr]] = field(default_factory=list)
    controls: list[int] = field(default_factory=list)
    checks: list[Optional[Fr]] = field(default_factory=list)
    nil_msg_hash: Optional[Fr] = None

    def constant_inputs(self, src: Iterable[Iterable[Word]]) -> None:
        """Add plain inputs."""
        self.inputs.extend(_pair(item) for item in src)

    def constant_inputs_with_check(self, src: Iterable[tuple[Word, Word, Word]]) -> None:
        """Add inputs together with their expected hashes."""
        size = len(self.inputs)
        del self.checks[size:]
        self.checks.extend([None] * (size - len(self.checks)))
        for a, b, expected in src:
            self.inputs.append((Fr(a), Fr(b)))
            self.checks.append(Fr(expected))
            self.controls.append(0)

    def stream_inputs(
        self, src: Iterable[Iterable[Word]], ctrl_start: int, step: int
    ) -> None:
        """Add inputs of one message, with controls counting down by step."""
        if ctrl_start < 0 or step < 0:
            raise ValueError("control start and step must be non-negative")
        new_inputs = [_pair(item) for item in src]
        series = list(islice(_control_series(ctrl_start, step), len(new_inputs)))
        if len(series) != len(new_inputs):
            raise ValueError(
                f"control {ctrl_start} with step {step} covers only "
                f"{len(series)} of {len(new_inputs)} inputs"
            )
        if len(self.inputs) != len(self.controls):
            raise ValueError("inputs and controls are not aligned")
        self.inputs.extend(new_inputs)
        self.controls.extend(series)

    def table_size(self) -> int:
        """Return the rows the table itself uses."""
        return len(self.inputs)

    def minimum_row_require(self) -> int:
        """Return the minimum circuit rows: hashes times rows per hash."""
        return len(self.inputs) * hash_block_size()