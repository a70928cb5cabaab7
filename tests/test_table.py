import pytest

from poseidonhash.field import Fr
from poseidonhash.hash import PoseidonHashTable, hash_msg, hash_pair
from poseidonhash.table import assign_rows, split_chunks, step_range_table

STEP = 32
MESSAGE1 = (Fr(1), Fr(2))
MESSAGE2 = (Fr(50331648), Fr(0))
PAIR_HASH = Fr(0x115CC0F5E7D690413DF64C6B9662E9CF2A3617F2743245519E19607A4417189A)


def test_single_pair_row_matches_known_hash():
    rows = assign_rows(PoseidonHashTable(inputs=[MESSAGE1]), 1, STEP)
    assert len(rows) == 1
    assert rows[0].state_out[0] == PAIR_HASH
    assert rows[0].hash_index == PAIR_HASH
    assert rows[0].header is True


def test_two_pairs_and_padding_rows():
    table = PoseidonHashTable(inputs=[MESSAGE1, (Fr(2), Fr(3))])
    rows = assign_rows(table, 4, STEP)
    assert [row.offset for row in rows] == [0, 1, 2, 3]
    assert rows[0].hash_index == PAIR_HASH
    assert rows[1].hash_index == hash_pair([2, 3])
    assert rows[2].inputs == (Fr.zero(), Fr.zero())
    assert rows[3].hash_index == hash_pair([0, 0])


def test_variable_length_sponge_spans_rows():
    table = PoseidonHashTable(inputs=[MESSAGE1, MESSAGE2], controls=[45, 13])
    rows = assign_rows(table, 4, STEP)
    expected = hash_msg([1, 2, 50331648, 0], 45 << 64)
    assert rows[0].hash_index == expected
    assert rows[1].hash_index == expected
    assert rows[0].header is True
    assert rows[1].header is False
    assert rows[1].sponge_continue is True
    assert rows[0].state_in[0] == Fr(45 << 64)


def test_controls_at_step_boundary():
    table = PoseidonHashTable(inputs=[MESSAGE1, MESSAGE2, MESSAGE1], controls=[64, 32])
    rows = assign_rows(table, 4, STEP)
    expected = hash_msg([1, 2, 50331648, 0], 64 << 64)
    assert rows[0].hash_index == expected
    assert rows[1].hash_index == expected
    assert rows[2].hash_index == PAIR_HASH
    assert rows[2].header is True


def test_unfinished_sponge_has_no_hash_index():
    table = PoseidonHashTable(inputs=[MESSAGE1], controls=[64])
    rows = assign_rows(table, 1, STEP)
    assert rows[0].hash_index is None


def test_empty_table_gives_padding_rows():
    rows = assign_rows(PoseidonHashTable(), 2, STEP)
    assert [row.hash_index for row in rows] == [hash_pair([0, 0])] * 2


def test_control_aux_is_inverse_of_flag():
    table = PoseidonHashTable(inputs=[MESSAGE1, MESSAGE2], controls=[45, 13])
    rows = assign_rows(table, 3, STEP)
    assert rows[0].control_flag * rows[0].control_aux == Fr.one()
    assert rows[1].control_flag * rows[1].control_aux == Fr.one()
    assert rows[2].control_aux == Fr.zero()


def test_check_matches():
    table = PoseidonHashTable()
    table.constant_inputs_with_check([(1, 2, PAIR_HASH)])
    rows = assign_rows(table, 1, STEP)
    assert rows[0].hash_index == PAIR_HASH


def test_check_mismatch_raises():
    table = PoseidonHashTable()
    table.constant_inputs_with_check([(1, 2, Fr(42))])
    with pytest.raises(ValueError, match="at 0"):
        assign_rows(table, 1, STEP)


def test_negative_calcs_rejected():
    with pytest.raises(ValueError):
        assign_rows(PoseidonHashTable(), -1, STEP)


def _rows_with_controls(controls):
    table = PoseidonHashTable(inputs=[MESSAGE1] * len(controls), controls=list(controls))
    return assign_rows(table, len(controls), STEP)


def test_split_even_chunks():
    rows = _rows_with_controls([0] * 8)
    chunks = split_chunks(rows, STEP, 4)
    assert [len(chunk) for chunk in chunks] == [3, 3, 2]
    assert [row for chunk in chunks for row in chunk] == rows


def test_split_keeps_running_sponge_together():
    rows = _rows_with_controls([0, 0, 64, 32, 0, 0, 0, 0])
    chunks = split_chunks(rows, STEP, 4)
    assert [len(chunk) for chunk in chunks] == [4, 3, 1]
    assert all(chunk[-1].control <= STEP for chunk in chunks)


def test_split_empty_and_invalid():
    assert split_chunks([], STEP, 4) == []
    with pytest.raises(ValueError):
        split_chunks(_rows_with_controls([0]), STEP, 0)


def test_step_range_table():
    values = step_range_table(3)
    assert len(values) == 4
    assert values[0] == Fr.zero()
    assert values[3] == Fr(3 << 64)
    with pytest.raises(ValueError):
        step_range_table(-1)