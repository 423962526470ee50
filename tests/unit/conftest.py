from typing import List

import pytest

from hoinprint.printer import Printer
from hoinprint.transport import Transport


class FakeTransport(Transport):
    """In-memory transport: records every write, serves scripted reply bytes."""

    def __init__(self, replies: bytes = b"") -> None:
        self.writes: List[bytes] = []
        self.replies = bytearray(replies)
        self.closed = False

    def write(self, data: bytes) -> int:
        self.writes.append(bytes(data))
        return len(data)

    def read(self, size: int) -> bytes:
        chunk = bytes(self.replies[:size])
        del self.replies[:size]
        return chunk

    def close(self) -> None:
        self.closed = True

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def printer(transport: FakeTransport) -> Printer:
    return Printer(transport, image_pacing=False)
