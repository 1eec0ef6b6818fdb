from syserror import ErrorCode, ErrorCondition, Errc, generic_category, hash_value
from syserror.hashing import (
    FNV_OFFSET_BASIS,
    FNV_PRIME,
    category_identity,
    fnv1a_pair,
    to_int32,
)


def test_fnv_constants():
    assert FNV_OFFSET_BASIS == 0xCBF29CE484222325
    assert FNV_PRIME == 0x100000001B3


def test_fnv1a_pair_reference_value():
    expected = ((FNV_OFFSET_BASIS ^ 1) * FNV_PRIME) & 0xFFFFFFFFFFFFFFFF
    expected = ((expected ^ 2) * FNV_PRIME) & 0xFFFFFFFFFFFFFFFF
    assert fnv1a_pair(1, 2) == expected


def test_negative_values_fold_to_unsigned_32():
    assert fnv1a_pair(7, -1) == fnv1a_pair(7, 0xFFFFFFFF)


def test_code_and_condition_hash_alike():
    ec = ErrorCode(Errc.io_error)
    cond = ErrorCondition(Errc.io_error)
    assert hash_value(ec) == hash_value(cond)
    assert hash_value(ec) == fnv1a_pair(generic_category().id, 5)
    assert hash(ec) == hash(cond)


def test_category_identity():
    assert category_identity(generic_category()) == generic_category().id
    thing = object()
    assert category_identity(thing) == id(thing)


def test_to_int32():
    assert to_int32(0x7FFFFFFF) == 0x7FFFFFFF
    assert to_int32(0x80000000) == -0x80000000
    assert to_int32(0x1_0000_0005) == 5
    assert to_int32(-1) == -1
