"""Windows system category: Win32/Winsock -> portable condition table.

When the Windows Runtime reports a Win32 error it usually arrives packed in
an HRESULT (failure bit set, FACILITY_WIN32, code in the low 16 bits). Those
are unpacked first so they classify exactly like the plain Win32 code.

Message text comes from FormatMessageW through a `MessageSource`, retried
with a growing buffer while the OS reports ERROR_INSUFFICIENT_BUFFER, then
normalized (trailing CR/LF and one trailing period removed).
"""
from __future__ import annotations

import logging
import sys
from typing import Protocol

from syserror import metrics
from syserror.condition import Errc, ErrorCondition
from syserror.config.schemas.platform import MessagesConfig
from syserror.hashing import to_int32

from .base import SystemCategory

log = logging.getLogger("syserror.platform.win32")

# ---- Win32 error codes (WinError.h) ----
ERROR_INVALID_FUNCTION = 1
ERROR_FILE_NOT_FOUND = 2
ERROR_PATH_NOT_FOUND = 3
ERROR_TOO_MANY_OPEN_FILES = 4
ERROR_ACCESS_DENIED = 5
ERROR_INVALID_HANDLE = 6
ERROR_NOT_ENOUGH_MEMORY = 8
ERROR_INVALID_ACCESS = 12
ERROR_OUTOFMEMORY = 14
ERROR_INVALID_DRIVE = 15
ERROR_CURRENT_DIRECTORY = 16
ERROR_NOT_SAME_DEVICE = 17
ERROR_WRITE_PROTECT = 19
ERROR_BAD_UNIT = 20
ERROR_NOT_READY = 21
ERROR_SEEK = 25
ERROR_WRITE_FAULT = 29
ERROR_READ_FAULT = 30
ERROR_SHARING_VIOLATION = 32
ERROR_LOCK_VIOLATION = 33
ERROR_HANDLE_DISK_FULL = 39
ERROR_DEV_NOT_EXIST = 55
ERROR_FILE_EXISTS = 80
ERROR_CANNOT_MAKE = 82
ERROR_OPEN_FAILED = 110
ERROR_BUFFER_OVERFLOW = 111
ERROR_DISK_FULL = 112
ERROR_INSUFFICIENT_BUFFER = 122
ERROR_INVALID_NAME = 123
ERROR_NEGATIVE_SEEK = 131
ERROR_BUSY_DRIVE = 142
ERROR_DIR_NOT_EMPTY = 145
ERROR_BUSY = 170
ERROR_ALREADY_EXISTS = 183
ERROR_LOCKED = 212
ERROR_DIRECTORY = 267
ERROR_OPERATION_ABORTED = 995
ERROR_NOACCESS = 998
ERROR_CANTOPEN = 1011
ERROR_CANTREAD = 1012
ERROR_CANTWRITE = 1013
ERROR_RETRY = 1237
ERROR_OPEN_FILES = 2401
ERROR_DEVICE_IN_USE = 2404

# ---- Winsock error codes ----
WSAEINTR = 10004
WSAEBADF = 10009
WSAEACCES = 10013
WSAEFAULT = 10014
WSAEINVAL = 10022
WSAEMFILE = 10024
WSAEWOULDBLOCK = 10035
WSAEINPROGRESS = 10036
WSAEALREADY = 10037
WSAENOTSOCK = 10038
WSAEDESTADDRREQ = 10039
WSAEMSGSIZE = 10040
WSAEPROTOTYPE = 10041
WSAENOPROTOOPT = 10042
WSAEPROTONOSUPPORT = 10043
WSAEOPNOTSUPP = 10045
WSAEAFNOSUPPORT = 10047
WSAEADDRINUSE = 10048
WSAEADDRNOTAVAIL = 10049
WSAENETDOWN = 10050
WSAENETUNREACH = 10051
WSAENETRESET = 10052
WSAECONNABORTED = 10053
WSAECONNRESET = 10054
WSAENOBUFS = 10055
WSAEISCONN = 10056
WSAENOTCONN = 10057
WSAETIMEDOUT = 10060
WSAECONNREFUSED = 10061
WSAENAMETOOLONG = 10063
WSAEHOSTUNREACH = 10065

# ---- HRESULT layout ----
FACILITY_WIN32 = 7

WIN32_CONDITION_TABLE: dict[int, Errc] = {
    0: Errc.success,
    ERROR_ACCESS_DENIED: Errc.permission_denied,
    ERROR_ALREADY_EXISTS: Errc.file_exists,
    ERROR_BAD_UNIT: Errc.no_such_device,
    ERROR_BUFFER_OVERFLOW: Errc.filename_too_long,
    ERROR_BUSY: Errc.device_or_resource_busy,
    ERROR_BUSY_DRIVE: Errc.device_or_resource_busy,
    ERROR_CANNOT_MAKE: Errc.permission_denied,
    ERROR_CANTOPEN: Errc.io_error,
    ERROR_CANTREAD: Errc.io_error,
    ERROR_CANTWRITE: Errc.io_error,
    ERROR_CURRENT_DIRECTORY: Errc.permission_denied,
    ERROR_DEV_NOT_EXIST: Errc.no_such_device,
    ERROR_DEVICE_IN_USE: Errc.device_or_resource_busy,
    ERROR_DIR_NOT_EMPTY: Errc.directory_not_empty,
    # "The directory name is invalid"
    ERROR_DIRECTORY: Errc.invalid_argument,
    ERROR_DISK_FULL: Errc.no_space_on_device,
    ERROR_FILE_EXISTS: Errc.file_exists,
    ERROR_FILE_NOT_FOUND: Errc.no_such_file_or_directory,
    ERROR_HANDLE_DISK_FULL: Errc.no_space_on_device,
    ERROR_INVALID_ACCESS: Errc.permission_denied,
    ERROR_INVALID_DRIVE: Errc.no_such_device,
    ERROR_INVALID_FUNCTION: Errc.function_not_supported,
    ERROR_INVALID_HANDLE: Errc.invalid_argument,
    ERROR_INVALID_NAME: Errc.invalid_argument,
    ERROR_LOCK_VIOLATION: Errc.no_lock_available,
    ERROR_LOCKED: Errc.no_lock_available,
    ERROR_NEGATIVE_SEEK: Errc.invalid_argument,
    ERROR_NOACCESS: Errc.permission_denied,
    ERROR_NOT_ENOUGH_MEMORY: Errc.not_enough_memory,
    ERROR_NOT_READY: Errc.resource_unavailable_try_again,
    ERROR_NOT_SAME_DEVICE: Errc.cross_device_link,
    ERROR_OPEN_FAILED: Errc.io_error,
    ERROR_OPEN_FILES: Errc.device_or_resource_busy,
    ERROR_OPERATION_ABORTED: Errc.operation_canceled,
    ERROR_OUTOFMEMORY: Errc.not_enough_memory,
    ERROR_PATH_NOT_FOUND: Errc.no_such_file_or_directory,
    ERROR_READ_FAULT: Errc.io_error,
    ERROR_RETRY: Errc.resource_unavailable_try_again,
    ERROR_SEEK: Errc.io_error,
    ERROR_SHARING_VIOLATION: Errc.permission_denied,
    ERROR_TOO_MANY_OPEN_FILES: Errc.too_many_files_open,
    ERROR_WRITE_FAULT: Errc.io_error,
    ERROR_WRITE_PROTECT: Errc.permission_denied,
    WSAEACCES: Errc.permission_denied,
    WSAEADDRINUSE: Errc.address_in_use,
    WSAEADDRNOTAVAIL: Errc.address_not_available,
    WSAEAFNOSUPPORT: Errc.address_family_not_supported,
    WSAEALREADY: Errc.connection_already_in_progress,
    WSAEBADF: Errc.bad_file_descriptor,
    WSAECONNABORTED: Errc.connection_aborted,
    WSAECONNREFUSED: Errc.connection_refused,
    WSAECONNRESET: Errc.connection_reset,
    WSAEDESTADDRREQ: Errc.destination_address_required,
    WSAEFAULT: Errc.bad_address,
    WSAEHOSTUNREACH: Errc.host_unreachable,
    WSAEINPROGRESS: Errc.operation_in_progress,
    WSAEINTR: Errc.interrupted,
    WSAEINVAL: Errc.invalid_argument,
    WSAEISCONN: Errc.already_connected,
    WSAEMFILE: Errc.too_many_files_open,
    WSAEMSGSIZE: Errc.message_size,
    WSAENAMETOOLONG: Errc.filename_too_long,
    WSAENETDOWN: Errc.network_down,
    WSAENETRESET: Errc.network_reset,
    WSAENETUNREACH: Errc.network_unreachable,
    WSAENOBUFS: Errc.no_buffer_space,
    WSAENOPROTOOPT: Errc.no_protocol_option,
    WSAENOTCONN: Errc.not_connected,
    WSAENOTSOCK: Errc.not_a_socket,
    WSAEOPNOTSUPP: Errc.operation_not_supported,
    WSAEPROTONOSUPPORT: Errc.protocol_not_supported,
    WSAEPROTOTYPE: Errc.wrong_protocol_type,
    WSAETIMEDOUT: Errc.timed_out,
    WSAEWOULDBLOCK: Errc.operation_would_block,
}


def unpack_hresult(value: int) -> int:
    """Return the Win32 code packed in a failed FACILITY_WIN32 HRESULT.

    Any other value is returned unchanged.
    """
    hr = to_int32(value)
    if hr < 0 and (hr >> 16) & 0x1FFF == FACILITY_WIN32:
        return hr & 0xFFFF
    return value


def default_error_condition_win32(
    value: int, category: SystemCategory | None = None
) -> ErrorCondition:
    """Classify a native Windows error into the portable condition set.

    Unmapped codes stay under the system category with their (unpacked)
    value, so they still compare equivalent to codes of that category.
    """
    value = unpack_hresult(value)
    kind = WIN32_CONDITION_TABLE.get(value)
    if kind is not None:
        return ErrorCondition(kind)
    if category is None:
        from syserror.platform import system_category

        category = system_category()
    return ErrorCondition(value, category)


def normalize_message(text: str) -> str:
    while text and text[-1] in "\r\n":
        text = text[:-1]
    if text.endswith("."):
        text = text[:-1]
    return text


class MessageSource(Protocol):
    """The OS message facility (FormatMessageW + GetLastError)."""

    def format_message(self, code: int, size: int) -> str | None:
        """Text for `code` if it fits in `size` chars, else None."""

    def last_error(self) -> int:
        """Native error left by the last failed format_message()."""


FORMAT_MESSAGE_IGNORE_INSERTS = 0x00000200
FORMAT_MESSAGE_FROM_SYSTEM = 0x00001000
LANG_NEUTRAL = 0x00
SUBLANG_DEFAULT = 0x01


def make_lang_id(primary: int, sub: int) -> int:
    return (sub << 10) | primary


class Kernel32MessageSource:
    """FormatMessageW via ctypes. Windows only."""

    def __init__(self) -> None:
        import ctypes
        from ctypes import wintypes

        self._ctypes = ctypes
        kernel32 = ctypes.WinDLL("kernel32", use_last_error=True)
        fn = kernel32.FormatMessageW
        fn.argtypes = [
            wintypes.DWORD,
            wintypes.LPCVOID,
            wintypes.DWORD,
            wintypes.DWORD,
            wintypes.LPWSTR,
            wintypes.DWORD,
            ctypes.c_void_p,
        ]
        fn.restype = wintypes.DWORD
        self._format = fn

    def format_message(self, code: int, size: int) -> str | None:
        buf = self._ctypes.create_unicode_buffer(size)
        n = self._format(
            FORMAT_MESSAGE_FROM_SYSTEM | FORMAT_MESSAGE_IGNORE_INSERTS,
            None,
            code & 0xFFFFFFFF,
            make_lang_id(LANG_NEUTRAL, SUBLANG_DEFAULT),
            buf,
            size,
            None,
        )
        if n == 0:
            return None
        return buf[:n]

    def last_error(self) -> int:
        return self._ctypes.get_last_error()


class UnavailableMessageSource:
    """Used off Windows: every lookup yields the placeholder."""

    def format_message(self, code: int, size: int) -> str | None:
        return None

    def last_error(self) -> int:
        return 0


def default_message_source() -> MessageSource:
    if sys.platform == "win32":
        return Kernel32MessageSource()
    return UnavailableMessageSource()


def message_win32(
    value: int,
    source: MessageSource,
    messages: MessagesConfig | None = None,
) -> str:
    messages = messages or MessagesConfig()
    size = messages.initial_buffer
    while True:
        text = source.format_message(value, size)
        if text:
            break
        if (
            source.last_error() != ERROR_INSUFFICIENT_BUFFER
            or size >= messages.max_buffer
        ):
            metrics.inc_win32_message_lookup("unknown")
            return messages.unknown
        size = min(size + max(size // 2, 1), messages.max_buffer)
        metrics.inc_win32_buffer_grow()
        log.debug("FormatMessageW buffer too small, retrying with %d", size)
    metrics.inc_win32_message_lookup("ok")
    metrics.observe("win32_message_buffer_chars", size)
    return normalize_message(text)


class Win32SystemCategory(SystemCategory):
    def __init__(
        self,
        source: MessageSource | None = None,
        messages: MessagesConfig | None = None,
    ) -> None:
        super().__init__()
        self._source = source if source is not None else default_message_source()
        self._messages = messages or MessagesConfig()

    def message(self, value: int) -> str:
        return message_win32(value, self._source, self._messages)

    def default_error_condition(self, value: int) -> ErrorCondition:
        return default_error_condition_win32(value, self)


__all__ = [
    "FACILITY_WIN32",
    "WIN32_CONDITION_TABLE",
    "Kernel32MessageSource",
    "MessageSource",
    "UnavailableMessageSource",
    "Win32SystemCategory",
    "default_error_condition_win32",
    "default_message_source",
    "message_win32",
    "normalize_message",
    "unpack_hresult",
]
