"""Poseidon parameters for the BN254 scalar field: width 3, x^5 S-box, 8 full rounds."""

from __future__ import annotations

from .constants import Matrix, mds_inverse_table, mds_table, round_constant_table
from .field import Fr

PARTIAL_ROUNDS = 57


def partial_rounds() -> int:
    """Return the number of partial rounds."""
    return PARTIAL_ROUNDS


def round_constants() -> list[tuple[Fr, ...]]:
    """Return a fresh list of the round constants, one row of three per round."""
    return list(round_constant_table())


def mds() -> Matrix:
    """Return the MDS matrix."""
    return mds_table()


def mds_inv() -> Matrix:
    """Return the inverse of the MDS matrix."""
    return mds_inverse_table()