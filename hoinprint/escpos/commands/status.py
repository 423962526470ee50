"""
Real-time status transmission (DLE EOT n).

A status query is a 3-byte request answered by exactly one byte. There is
no sequence number: the reply must be read before anything else is sent.
Every bit pattern is a valid reply; reserved bits are ignored.

Reference: Hoin HOP-E802 programming manual, DLE EOT
"""

from dataclasses import dataclass
from enum import Enum
from typing import Type, Union

from .validation import check_enum

__all__ = [
    "StatusClass",
    "PrinterStatus",
    "OfflineStatus",
    "ErrorStatus",
    "PaperSensorStatus",
    "status_request",
    "decode_status",
]


class StatusClass(Enum):
    """Selector ``n`` of DLE EOT n."""

    PRINTER = 1
    OFFLINE = 2
    ERROR = 3
    PAPER_SENSOR = 4


def _flag(reply: int, mask: int) -> bool:
    # multi-bit masks require every bit to be set
    return reply & mask == mask


@dataclass(frozen=True)
class PrinterStatus:
    """DLE EOT 1."""

    drawer_open: bool

    @classmethod
    def from_byte(cls, reply: int) -> "PrinterStatus":
        return cls(drawer_open=_flag(reply, 0b0000_0100))


@dataclass(frozen=True)
class OfflineStatus:
    """DLE EOT 2."""

    cover_open: bool
    feed_button: bool
    printing_stopped: bool
    error_occurred: bool

    @classmethod
    def from_byte(cls, reply: int) -> "OfflineStatus":
        return cls(
            cover_open=_flag(reply, 0b0000_0100),
            feed_button=_flag(reply, 0b0000_1000),
            printing_stopped=_flag(reply, 0b0010_0000),
            error_occurred=_flag(reply, 0b0100_0000),
        )


@dataclass(frozen=True)
class ErrorStatus:
    """DLE EOT 3."""

    auto_cutter: bool
    unrecoverable: bool
    auto_recoverable: bool

    @classmethod
    def from_byte(cls, reply: int) -> "ErrorStatus":
        return cls(
            auto_cutter=_flag(reply, 0b0000_1000),
            unrecoverable=_flag(reply, 0b0010_0000),
            auto_recoverable=_flag(reply, 0b0100_0000),
        )


@dataclass(frozen=True)
class PaperSensorStatus:
    """DLE EOT 4. Each sensor reports on two bits."""

    near_end: bool
    roll_end: bool

    @classmethod
    def from_byte(cls, reply: int) -> "PaperSensorStatus":
        return cls(
            near_end=_flag(reply, 0b0000_1100),
            roll_end=_flag(reply, 0b0110_0000),
        )


StatusRecord = Union[PrinterStatus, OfflineStatus, ErrorStatus, PaperSensorStatus]

_RECORDS: dict[StatusClass, Type[StatusRecord]] = {
    StatusClass.PRINTER: PrinterStatus,
    StatusClass.OFFLINE: OfflineStatus,
    StatusClass.ERROR: ErrorStatus,
    StatusClass.PAPER_SENSOR: PaperSensorStatus,
}


def status_request(status_class: StatusClass) -> bytes:
    """
    Build the real-time status request.

    Command: DLE EOT n
    Hex: 10 04 n (n = 1-4)
    """
    check_enum(status_class, StatusClass)
    return b"\x10\x04" + bytes([status_class.value])


def decode_status(status_class: StatusClass, reply: int) -> StatusRecord:
    """Decode a reply byte into the record for ``status_class``."""
    check_enum(status_class, StatusClass)
    return _RECORDS[status_class].from_byte(reply & 0xFF)
