import errno
from enum import IntEnum

import pytest

from syserror import (
    Errc,
    ErrorCategory,
    ErrorCode,
    ErrorCondition,
    generic_category,
    is_error_code_enum,
    is_error_condition_enum,
    make_error_code,
    make_error_condition,
)
from syserror.condition import ERRNO_NAMES, ERRNO_SYMBOL_TO_ERRC


class ParserCategory(ErrorCategory):
    def __init__(self):
        super().__init__(0x5EED)

    @property
    def name(self):
        return "parser"

    def message(self, value):
        return {1: "unexpected token", 2: "unterminated string"}.get(
            value, f"parser error {value}"
        )

    def default_error_condition(self, value):
        if value == ParseError.unterminated_string:
            return ErrorCondition(Errc.illegal_byte_sequence)
        return super().default_error_condition(value)


PARSER = ParserCategory()


class ParseError(IntEnum):
    unexpected_token = 1
    unterminated_string = 2


@make_error_code.register(ParseError)
def _parse_error_code(value):
    return ErrorCode(int(value), PARSER)


class Unregistered(IntEnum):
    thing = 1


def test_errc_fixed_values():
    assert Errc.success == 0
    assert Errc.permission_denied == 13
    assert Errc.file_exists == 17
    assert Errc.no_such_file_or_directory == 2
    assert Errc.timed_out == 110
    assert Errc.operation_canceled == 125


def test_errc_aliases():
    assert Errc.operation_not_supported is Errc.not_supported
    assert Errc.operation_would_block is Errc.resource_unavailable_try_again


def test_errno_symbol_tables():
    assert ERRNO_NAMES[13] == "EACCES"
    assert ERRNO_SYMBOL_TO_ERRC["EACCES"] == 13
    assert ERRNO_SYMBOL_TO_ERRC["EWOULDBLOCK"] == 11
    assert ERRNO_SYMBOL_TO_ERRC["ENOTSUP"] == 95


def test_condition_default_is_generic_success():
    cond = ErrorCondition()
    assert cond.value() == 0
    assert cond.category() is generic_category()
    assert not cond


def test_condition_from_enum():
    cond = ErrorCondition(Errc.file_exists)
    assert cond.value() == 17
    assert cond.category() is generic_category()
    assert cond == Errc.file_exists
    assert cond != Errc.permission_denied
    assert cond


def test_condition_requires_category_for_plain_int():
    with pytest.raises(TypeError):
        ErrorCondition(5)
    with pytest.raises(TypeError):
        ErrorCondition(5, object())


def test_condition_assign_clear_and_order():
    cond = ErrorCondition(3, PARSER)
    assert str(cond) == "parser:3"
    cond.clear()
    assert cond == ErrorCondition()
    cond.assign(1, generic_category())
    assert ErrorCondition(0, generic_category()) < cond


def test_condition_message():
    cond = ErrorCondition(Errc.no_such_file_or_directory)
    assert cond.message() == generic_category().message(2)


def test_generic_message_uses_host_strerror():
    import os

    assert generic_category().message(13) == os.strerror(errno.EACCES)


def test_generic_message_unknown_value():
    text = generic_category().message(123456)
    assert isinstance(text, str) and text


def test_enum_registration_checks():
    assert is_error_code_enum(Errc.io_error)
    assert is_error_condition_enum(Errc.io_error)
    assert is_error_code_enum(ParseError.unexpected_token)
    assert not is_error_condition_enum(ParseError.unexpected_token)
    assert not is_error_code_enum(Unregistered.thing)
    assert not is_error_code_enum(5)


def test_unregistered_enum_rejected():
    with pytest.raises(TypeError):
        make_error_code(Unregistered.thing)
    with pytest.raises(TypeError):
        make_error_condition(Unregistered.thing)
    with pytest.raises(TypeError):
        ErrorCode(Unregistered.thing)


def test_custom_domain_code():
    ec = ErrorCode(ParseError.unterminated_string)
    assert ec.category() is PARSER
    assert ec.message() == "unterminated string"
    assert ec.matches(Errc.illegal_byte_sequence)
    assert not ec.matches(Errc.invalid_argument)
    other = ErrorCode(ParseError.unexpected_token)
    assert other.default_error_condition() == ErrorCondition(1, PARSER)
    assert not other.matches(Errc.illegal_byte_sequence)


def test_errc_errno_name():
    assert Errc.permission_denied.errno_name == "EACCES"
    assert Errc.success.errno_name is None
    assert Errc.operation_would_block.errno_name == "EAGAIN"
