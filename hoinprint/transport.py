"""
Byte transports to the printer.

    Transport          abstract duplex byte pipe (read/write/close)
    SocketTransport    TCP stream, default port 9100
    DeviceTransport    local device file opened read-write
    HealingTransport   wraps a dial factory; on a broken pipe or an expired
                       deadline it closes the stale stream, dials the same
                       target again and retries the failed call once

Redial is last-mile recovery for printers that drop idle connections. It
is not a retry loop: one redial, one retry, no backoff.
"""

import abc
import logging
import socket
import threading
from typing import Callable, Final, Optional, Tuple, Type

from .exceptions import RedialError, TransportError

__all__ = [
    "DEFAULT_PORT",
    "TRANSIENT_ERRORS",
    "Transport",
    "SocketTransport",
    "DeviceTransport",
    "HealingTransport",
    "parse_address",
    "dial_address",
    "dial_device",
]

logger = logging.getLogger(__name__)

DEFAULT_PORT: Final[int] = 9100

# "broken pipe" and "deadline exceeded"; socket.timeout is TimeoutError
TRANSIENT_ERRORS: Final[Tuple[Type[OSError], ...]] = (BrokenPipeError, TimeoutError)


class Transport(abc.ABC):
    """Abstract byte pipe to a printer."""

    @abc.abstractmethod
    def write(self, data: bytes) -> int:
        """
        Write all of data.

        Returns:
            Number of bytes written (always len(data) on success).

        Raises:
            OSError: If the underlying stream fails.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def read(self, size: int) -> bytes:
        """
        Read up to size bytes, blocking until at least one is available.

        Returns:
            The bytes read; b"" means the peer closed the stream.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class SocketTransport(Transport):
    """TCP connection to a networked printer."""

    def __init__(self, host: str, port: int = DEFAULT_PORT, timeout: Optional[float] = None) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self._sock: Optional[socket.socket] = socket.create_connection((host, port), timeout=timeout)
        logger.debug("Connected to %s:%d", host, port)

    def __repr__(self) -> str:
        return f"SocketTransport({self.host!r}, {self.port})"

    def _socket(self) -> socket.socket:
        if self._sock is None:
            raise BrokenPipeError(f"connection to {self.host}:{self.port} is closed")
        return self._sock

    def write(self, data: bytes) -> int:
        self._socket().sendall(data)
        return len(data)

    def read(self, size: int) -> bytes:
        return self._socket().recv(size)

    def close(self) -> None:
        if self._sock is not None:
            try:
                self._sock.close()
            finally:
                self._sock = None


class DeviceTransport(Transport):
    """Local printer device, e.g. /dev/usb/lp0, opened unbuffered read-write."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._file = open(path, "r+b", buffering=0)
        logger.debug("Opened device %s", path)

    def __repr__(self) -> str:
        return f"DeviceTransport({self.path!r})"

    def write(self, data: bytes) -> int:
        view = memoryview(data)
        written = 0
        while written < len(view):
            n = self._file.write(view[written:])
            if n is None:
                # non-blocking device not ready
                raise BlockingIOError(f"device {self.path} is not ready for writing")
            written += n
        return written

    def read(self, size: int) -> bytes:
        return self._file.read(size) or b""

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class HealingTransport(Transport):
    """
    Transport that silently replaces its stream after a transient failure.

    Holds exactly one live stream plus the dial factory that produced it.
    The whole try/redial/retry sequence runs under a lock, so no caller can
    observe a half-replaced stream.

    A failed redial only fails the call that triggered it. The next call
    dials the target again; only close() ends the transport for good.

    Args:
        dial: Zero-argument factory returning a fresh connected Transport
              to the same target.
        target: Human-readable target used in log and error messages.
        transient_errors: Exception types that trigger a redial.

    Raises:
        OSError: From the initial dial.
    """

    def __init__(
        self,
        dial: Callable[[], Transport],
        target: Optional[str] = None,
        transient_errors: Tuple[Type[BaseException], ...] = TRANSIENT_ERRORS,
    ) -> None:
        self._dial = dial
        self.target = target
        self.transient_errors = transient_errors
        self._lock = threading.Lock()
        self._closed = False
        self._stream: Optional[Transport] = dial()
        self.redials = 0

    def __repr__(self) -> str:
        return f"HealingTransport({self.target!r})"

    def _redial(self) -> Transport:
        if self._stream is not None:
            try:
                self._stream.close()
            except OSError as e:
                logger.debug("Ignoring error while closing stale stream to %s: %s", self.target, e)
            self._stream = None

        self._stream = self._dial()
        self.redials += 1
        return self._stream

    def _current_stream(self) -> Transport:
        if self._closed:
            raise TransportError(f"transport to {self.target} is closed")
        if self._stream is None:
            # a previous redial failed; the target may be back
            try:
                self._stream = self._dial()
            except OSError as e:
                logger.error("Dial to %s failed: %r", self.target, e)
                raise TransportError(f"unable to dial {self.target}: {e}") from e
            self.redials += 1
            logger.info("Reconnected to %s", self.target)
        return self._stream

    def _call(self, operation: str, attempt: Callable[[Transport], object]):
        with self._lock:
            stream = self._current_stream()
            try:
                return attempt(stream)
            except self.transient_errors as original:
                logger.warning(
                    "%s to %s failed with %r; redialing",
                    operation,
                    self.target,
                    original,
                )
                try:
                    stream = self._redial()
                except OSError as redial_error:
                    logger.error("Redial to %s failed: %r", self.target, redial_error)
                    raise RedialError(original, redial_error, self.target) from redial_error

                logger.info("Redialed %s; retrying %s once", self.target, operation)
                return attempt(stream)

    def write(self, data: bytes) -> int:
        return self._call("write", lambda stream: stream.write(data))

    def read(self, size: int) -> bytes:
        return self._call("read", lambda stream: stream.read(size))

    def close(self) -> None:
        with self._lock:
            self._closed = True
            if self._stream is not None:
                try:
                    self._stream.close()
                finally:
                    self._stream = None


# =============================================================================
# DIAL HELPERS
# =============================================================================


def parse_address(address: str, default_port: int = DEFAULT_PORT) -> Tuple[str, int]:
    """
    Split "host[:port]" into (host, port).

    Example:
        >>> parse_address("192.168.1.23:9100")
        ('192.168.1.23', 9100)
        >>> parse_address("printer.local")
        ('printer.local', 9100)
    """
    host, sep, port = address.rpartition(":")
    if not sep:
        return address, default_port
    if not host:
        raise ValueError(f"Missing host in printer address {address!r}")
    try:
        return host, int(port)
    except ValueError:
        raise ValueError(f"Invalid port in printer address {address!r}") from None


def dial_address(
    address: str,
    timeout: Optional[float] = None,
    default_port: int = DEFAULT_PORT,
) -> HealingTransport:
    """Connect to "host[:port]" with redial-on-failure."""
    host, port = parse_address(address, default_port)
    return HealingTransport(
        lambda: SocketTransport(host, port, timeout=timeout),
        target=f"{host}:{port}",
    )


def dial_device(path: str) -> HealingTransport:
    """Open a device path with reopen-on-failure."""
    return HealingTransport(lambda: DeviceTransport(path), target=path)
