from syserror import ErrorCategory, ErrorCode, ErrorCondition, generic_category


class BrokenCategory(ErrorCategory):
    @property
    def name(self):
        return "broken"

    def message(self, value):
        raise RuntimeError("no text")


class WideCategory(ErrorCategory):
    @property
    def name(self):
        return "wide"

    def message(self, value):
        return "héllo wörld ☃"


def _text(buf):
    return bytes(buf).split(b"\0", 1)[0].decode("utf-8")


def test_message_to_writes_terminated_text():
    buf = bytearray(256)
    ErrorCode(2, generic_category()).message_to(buf)
    assert _text(buf) == generic_category().message(2)


def test_message_to_never_overflows():
    full = WideCategory().message(1).encode("utf-8")
    for length in range(1, len(full) + 4):
        buf = bytearray(b"\xaa" * (length + 4))
        ErrorCode(1, WideCategory()).message_to(buf, length)
        assert bytes(buf[length:]) == b"\xaa" * 4
        assert 0 in buf[:length]
        # truncation never splits a UTF-8 sequence
        _text(buf)


def test_message_to_zero_length_untouched():
    buf = bytearray(b"abc")
    ErrorCode(1, generic_category()).message_to(buf, 0)
    assert buf == bytearray(b"abc")
    empty = bytearray()
    ErrorCode(1, generic_category()).message_to(empty)
    assert empty == bytearray()


def test_message_to_length_one_is_just_nul():
    buf = bytearray(b"zz")
    ErrorCode(1, generic_category()).message_to(buf, 1)
    assert buf == bytearray(b"\0z")


def test_message_to_fallback_on_exception():
    buf = bytearray(128)
    ErrorCode(42, BrokenCategory()).message_to(buf)
    assert _text(buf) == "No message text available for error 42"


def test_message_to_memoryview():
    raw = bytearray(16)
    view = memoryview(raw)
    ErrorCondition(5, WideCategory()).message_to(view, 7)
    assert _text(raw) == "héllo"
