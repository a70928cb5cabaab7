from poseidonhash import bn256
from poseidonhash.field import Fr
from poseidonhash.primitives import Spec, p128_pow5_t3


def test_partial_rounds():
    assert bn256.partial_rounds() == 57


def test_round_constant_shape():
    constants = bn256.round_constants()
    assert len(constants) == 57 + 8
    assert all(len(row) == 3 for row in constants)


def test_round_constants_is_a_fresh_list():
    constants = bn256.round_constants()
    constants.clear()
    assert len(bn256.round_constants()) == 65


def test_verify_constants():
    c = bn256.round_constants()
    m = bn256.mds()
    assert repr(c[0][0]) == "0x0ee9a592ba9a9518d05986d656f40c2114c4993c11bb29938d21d47304cd8e6e"
    assert repr(c[-1][2]) == "0x1da55cc900f0d21f4a3e694391918a1b3c23b2ac773c6b3ef88e2e4228325161"
    assert repr(m[0][0]) == "0x109b7f411ba0e4c9b2b70caf5c36a7b194be7c11ad24378bfedb68592ba8118b"
    assert repr(m[-1][0]) == "0x143021ec686a3f330d5f9e654638065ce6cd79e28c5b3753326244ee65a1b1a7"


def test_verify_mds():
    m = bn256.mds()
    m_inv = bn256.mds_inv()
    for i in range(3):
        for j in range(3):
            product = sum((m[i][k] * m_inv[k][j] for k in range(3)), Fr.zero())
            assert product == (Fr.one() if i == j else Fr.zero())


def test_verify_constants_generation():
    generated = Spec(
        full_rounds=8, partial_rounds=57, mds=bn256.mds(), mds_inv=bn256.mds_inv()
    )
    round_constants, mds, mds_inv = generated.constants()
    round_constants2, mds2, mds_inv2 = p128_pow5_t3().constants()
    assert len(round_constants) == 57 + 8
    assert round_constants == round_constants2
    assert list(round_constants) == bn256.round_constants()
    assert mds == mds2
    assert mds_inv == mds_inv2


def test_raw_constants_fill_every_word():
    round_constants, _, _ = p128_pow5_t3().constants()
    assert round_constants[4][1] != Fr.zero()