import copy

from syserror import ErrorCategory, generic_category, interop_category
from syserror.generic import (
    GENERIC_CATEGORY_ID,
    INTEROP_CATEGORY_ID,
    SYSTEM_CATEGORY_ID,
)
from syserror.platform import (
    PosixSystemCategory,
    Win32SystemCategory,
    system_category,
)


class AnonCategory(ErrorCategory):
    @property
    def name(self):
        return "anon"

    def message(self, value):
        return f"anon {value}"


class TaggedCategory(ErrorCategory):
    def __init__(self, ident):
        super().__init__(ident)

    @property
    def name(self):
        return "tagged"

    def message(self, value):
        return f"tagged {value}"


def test_builtin_ids():
    assert generic_category().id == GENERIC_CATEGORY_ID
    assert system_category().id == SYSTEM_CATEGORY_ID
    assert SYSTEM_CATEGORY_ID == GENERIC_CATEGORY_ID + 1
    assert interop_category().id == INTEROP_CATEGORY_ID


def test_accessors_return_singletons():
    assert generic_category() is generic_category()
    assert system_category() is system_category()
    assert interop_category() is interop_category()


def test_names():
    assert generic_category().name == "generic"
    assert system_category().name == "system"
    assert interop_category().name == "interop"


def test_same_id_instances_compare_equal():
    a = TaggedCategory(0x1234)
    b = TaggedCategory(0x1234)
    assert a is not b
    assert a == b
    assert not (a < b) and not (b < a)
    assert hash(a) == hash(b)


def test_system_variants_share_identity(fake_source):
    assert Win32SystemCategory(source=fake_source) == PosixSystemCategory()
    assert Win32SystemCategory(source=fake_source) == system_category()


def test_zero_id_compares_by_object():
    a = AnonCategory()
    b = AnonCategory()
    assert a == a
    assert a != b
    assert (a < b) != (b < a)


def test_zero_id_orders_before_registered():
    anon = AnonCategory()
    assert anon < generic_category()
    assert not (generic_category() < anon)


def test_registered_order_by_id():
    assert generic_category() < system_category()
    assert interop_category() < generic_category()


def test_copy_keeps_identity():
    cat = generic_category()
    assert copy.copy(cat) is cat
    assert copy.deepcopy(cat) is cat


def test_default_failed_is_nonzero():
    cat = AnonCategory()
    assert not cat.failed(0)
    assert cat.failed(1)
    assert cat.failed(-1)


def test_default_condition_is_own_category():
    cat = AnonCategory()
    cond = cat.default_error_condition(9)
    assert cond.value() == 9
    assert cond.category() is cat
    assert cat.equivalent(9, cond)
    assert not cat.equivalent(8, cond)


def test_never_equal_to_other_types():
    assert generic_category() != "generic"
    assert generic_category() != GENERIC_CATEGORY_ID
