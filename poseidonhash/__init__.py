"""Poseidon hash over the BN256 scalar field: field arithmetic, Grain constants, sponge, hashing and hash table rows."""

__version__ = "0.1.0"

__all__ = ["bn256", "constants", "field", "grain", "hash", "primitives", "table"]