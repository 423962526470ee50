"""
Exception hierarchy for hoinprint.

    PrinterError
    ├── CommandValidationError   (also a ValueError; nothing was sent)
    └── TransportError           (stream failed; __cause__ holds the OSError)
        └── RedialError          (recovery dial failed after a transient error)
"""

from typing import Optional

__all__ = [
    "PrinterError",
    "CommandValidationError",
    "TransportError",
    "RedialError",
]


class PrinterError(Exception):
    """Base class for every error raised by hoinprint."""


class CommandValidationError(PrinterError, ValueError):
    """A command parameter is out of range or outside its legal set."""


class TransportError(PrinterError):
    """The byte stream to the printer failed."""


class RedialError(TransportError):
    """
    A transient stream failure could not be healed.

    Carries both failures so callers can tell "device gone" apart from a
    hiccup that healed itself.

    Attributes:
        original_error: The broken-pipe/deadline error from the first attempt.
        redial_error: The error raised while re-establishing the connection.
    """

    def __init__(
        self,
        original_error: BaseException,
        redial_error: BaseException,
        target: Optional[str] = None,
    ) -> None:
        self.original_error = original_error
        self.redial_error = redial_error
        self.target = target
        where = f" to {target}" if target else ""
        super().__init__(
            f"could not redial{where}: {redial_error!r} "
            f"(after original error: {original_error!r})"
        )
