"""Witness rows of the Poseidon hash table, and their split into chunks."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import chain, islice, pairwise, repeat
from typing import Optional, Sequence

from .field import Fr
from .hash import HASHABLE_DOMAIN_SPEC, PoseidonHashTable, hasher

State = tuple[Fr, Fr, Fr]


@dataclass
class HashRow:
    """The values assigned to one row of the hash table.

    `header` marks the first row of a sponge; `hash_index` is the final hash of
    the sponge the row belongs to, or None while that sponge is not finished.
    """

    offset: int
    inputs: tuple[Fr, Fr]
    control: int
    control_flag: Fr
    control_aux: Fr
    header: bool
    state_in: State
    state_out: State
    hash_index: Optional[Fr] = None

    @property
    def sponge_continue(self) -> bool:
        """Whether this row continues the sponge of the row before it."""
        return not self.header


def _padded(values: Sequence, calcs: int) -> list:
    return list(islice(chain(values, repeat(None)), calcs))


def assign_rows(table: PoseidonHashTable, calcs: int, step: int) -> list[HashRow]:
    """Compute the `calcs` rows of the hash table, padding with empty rows.

    A row whose control is at most `step` closes its sponge. A row with an
    expected hash that does not match raises ValueError.
    """
    if calcs < 0:
        raise ValueError("the number of rows must be non-negative")
    if step < 0:
        raise ValueError("step must be non-negative")

    helper = hasher()
    rows: list[HashRow] = []
    state = [Fr.zero()] * 3
    is_new_sponge = True
    process_start = 0

    items = zip(
        _padded(table.inputs, calcs),
        _padded(table.controls, calcs),
        _padded(table.checks, calcs),
    )
    for offset, (inputs, control, check) in enumerate(items):
        control = 0 if control is None else control
        pair = (Fr.zero(), Fr.zero()) if inputs is None else (Fr(inputs[0]), Fr(inputs[1]))
        control_flag = Fr.from_u128(control * HASHABLE_DOMAIN_SPEC)

        if is_new_sponge:
            state[0] = control_flag
            process_start = offset
            state[1:] = pair
        else:
            state[1:] = [word + value for word, value in zip(state[1:], pair)]

        state_in = tuple(state)
        state = helper.permute(state)

        if check is not None and Fr(check) != state[0]:
            raise ValueError(f"hash output not match with expected at {offset}")

        rows.append(
            HashRow(
                offset=offset,
                inputs=pair,
                control=control,
                control_flag=control_flag,
                control_aux=control_flag.invert() if control_flag else Fr.zero(),
                header=is_new_sponge,
                state_in=state_in,  # type: ignore[arg-type]
                state_out=tuple(state),  # type: ignore[arg-type]
            )
        )

        is_new_sponge = control <= step
        if is_new_sponge:
            current_hash = state[0]
            for row in rows[process_start:]:
                row.hash_index = current_hash

    return rows


def split_chunks(
    rows: Sequence[HashRow], step: int, chunks_count: int
) -> list[list[HashRow]]:
    """Split rows into chunks that each end where a sponge closes.

    Every chunk but possibly the last holds at least len(rows) // chunks_count + 1
    rows, unless a sponge still running forces it to grow.
    """
    if chunks_count <= 0:
        raise ValueError("the number of chunks must be positive")
    if not rows:
        return []

    min_len = len(rows) // chunks_count + 1
    chunks: list[list[HashRow]] = []
    current = [rows[0]]
    chunk_len = 0
    for prev, nxt in pairwise(rows):
        chunk_len += 1
        if prev.control > step or chunk_len < min_len:
            current.append(nxt)
        else:
            chunk_len = 0
            chunks.append(current)
            current = [nxt]
    chunks.append(current)
    return chunks


def step_range_table(step: int) -> list[Fr]:
    """Return the allowed control flags: i * 2^64 for i from 0 to step."""
    if step < 0:
        raise ValueError("step must be non-negative")
    return [Fr.from_u128(i * HASHABLE_DOMAIN_SPEC) for i in range(step + 1)]