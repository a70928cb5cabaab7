# poseidonhash

The Poseidon algebraic hash function over the BN256 (BN254) scalar field,
with the `P128Pow5T3` parameters: width 3, rate 2, x^5 S-box, 8 full rounds
and 57 partial rounds. Pairs and messages are hashed in the iden3 layout,
with inputs right-aligned in the state. Pure Python, no dependencies.

## Installation

```
pip install .
```

## Modules

- `poseidonhash.field`: `Fr`, an immutable element of the BN256 scalar
  field. It supports `+`, `-`, `*`, `/`, unary `-` and `**` with other `Fr`
  values and plain integers, and offers `zero()`, `one()`, `from_u128()`,
  `from_str()` (decimal, no sign, no leading zeros), `from_repr()` and
  `to_repr()` (32 bytes, little-endian, canonical), `from_bytes_wide()`
  (64 bytes, reduced), `invert()` and `pow()`. An element prints as
  `0x` followed by 64 hex digits.
- `poseidonhash.grain`: `Grain`, the Grain LFSR in self-shrinking mode.
  It iterates over bits and draws field elements with
  `next_field_element()` (with rejection) or
  `next_field_element_without_rejection()` (reduced). `FieldType` and
  `SboxType` hold the tags written into its initial state.
- `poseidonhash.constants`: the fixed tables `round_constant_table()`
  (65 rows of 3), `mds_table()` and `mds_inverse_table()`.
- `poseidonhash.bn256`: `partial_rounds()`, `round_constants()`, `mds()` and
  `mds_inv()` for the BN256 parameters.
- `poseidonhash.primitives`: `Spec` (round counts, S-box exponent and
  constants; round constants left out are derived from `Grain`),
  `p128_pow5_t3()`, `permute(state, spec)`, the domains `ConstantLength`,
  `ConstantLengthIden3` and `VariableLengthIden3`, the duplex `Sponge`, and
  `Hash` with `hash()` for fixed-length messages and `hash_with_cap()` for
  variable-length ones.
- `poseidonhash.hash`: `hash_pair()` for two-to-one hashing, as in Merkle
  trees; `hash_msg()` for messages of any length; `hasher()` and
  `msg_hasher()`; `hash_block_size()`; the constants
  `HASHABLE_DOMAIN_SPEC` (2^64) and `DEFAULT_STEP` (62); and
  `PoseidonHashTable`, a batch of hash inputs with control flags and
  optional expected outputs.
- `poseidonhash.table`: `assign_rows()` works out, row by row, the values of
  a hash table (`HashRow`: inputs, control flag and its inverse, header mark,
  state before and after the permutation, and the final hash of the row's
  sponge); `split_chunks()` cuts rows into chunks that end where a sponge
  closes; `step_range_table()` lists the allowed control flags.

## Usage

Hash two field elements:

```python
from poseidonhash.field import Fr
from poseidonhash.hash import hash_pair

digest = hash_pair([Fr.from_str("1"), Fr.from_str("2")])
print(digest)
```

Hash a message of any length. The capacity defaults to the message length
times 2^64; pass `cap` to set it, for example to a byte count:

```python
from poseidonhash.field import Fr
from poseidonhash.hash import hash_msg

msg = [Fr.from_str("1"), Fr.from_str("2"), Fr.from_str("50331648")]
digest = hash_msg(msg, 45)
```

Build a hash table and compute its rows. With `stream_inputs`, the controls
count down from the start by the step (here 45, then 13); a row whose
control is at most the step closes its sponge:

```python
from poseidonhash.field import Fr
from poseidonhash.hash import PoseidonHashTable
from poseidonhash.table import assign_rows

table = PoseidonHashTable()
table.stream_inputs([(Fr.from_str("1"), Fr.from_str("2")),
                     (Fr.from_str("50331648"), Fr.zero())], 45, 32)
rows = assign_rows(table, 4, 32)
print(rows[0].hash_index == rows[1].hash_index)  # True: one sponge
print(table.minimum_row_require())
```

`assign_rows` raises `ValueError` when an expected hash in the table's
`checks` does not match the computed one.

## What this package does not do

It computes hashes and the values a hash table would hold, but it has no
constraint system: it builds no circuit, lays out no gates or lookups, and
neither creates nor verifies proofs. It does not generate MDS matrices;
a `Spec` must be given its MDS matrix and inverse. There is no command-line
tool.

## Tests

```
pip install .[test]
pytest
```