import pytest

from hoinprint.escpos.commands.status import (
    ErrorStatus,
    OfflineStatus,
    PaperSensorStatus,
    PrinterStatus,
    StatusClass,
    decode_status,
    status_request,
)
from hoinprint.exceptions import CommandValidationError


class TestStatusRequest:
    @pytest.mark.parametrize("status_class,n", [(c, c.value) for c in StatusClass])
    def test_request_bytes(self, status_class: StatusClass, n: int) -> None:
        assert status_request(status_class) == bytes([0x10, 0x04, n])

    def test_rejects_raw_selector(self) -> None:
        with pytest.raises(CommandValidationError):
            status_request(5)  # type: ignore[arg-type]


class TestDecode:
    def test_drawer_open(self) -> None:
        assert decode_status(StatusClass.PRINTER, 0b0000_0100) == PrinterStatus(drawer_open=True)
        assert decode_status(StatusClass.PRINTER, 0b0001_0010) == PrinterStatus(drawer_open=False)

    def test_roll_end(self) -> None:
        status = decode_status(StatusClass.PAPER_SENSOR, 0b0110_0000)
        assert status == PaperSensorStatus(near_end=False, roll_end=True)

    def test_paper_sensor_needs_both_bits(self) -> None:
        assert decode_status(StatusClass.PAPER_SENSOR, 0b0010_0100) == PaperSensorStatus(
            near_end=False, roll_end=False
        )
        assert decode_status(StatusClass.PAPER_SENSOR, 0b0000_1100).near_end

    @pytest.mark.parametrize(
        "reply,expected",
        [
            (0b0000_0100, OfflineStatus(True, False, False, False)),
            (0b0000_1000, OfflineStatus(False, True, False, False)),
            (0b0010_0000, OfflineStatus(False, False, True, False)),
            (0b0100_0000, OfflineStatus(False, False, False, True)),
            (0b0001_0010, OfflineStatus(False, False, False, False)),
        ],
    )
    def test_offline(self, reply: int, expected: OfflineStatus) -> None:
        assert decode_status(StatusClass.OFFLINE, reply) == expected

    @pytest.mark.parametrize(
        "reply,expected",
        [
            (0b0000_1000, ErrorStatus(True, False, False)),
            (0b0010_0000, ErrorStatus(False, True, False)),
            (0b0100_0000, ErrorStatus(False, False, True)),
            (0b1111_1111, ErrorStatus(True, True, True)),
        ],
    )
    def test_error(self, reply: int, expected: ErrorStatus) -> None:
        assert decode_status(StatusClass.ERROR, reply) == expected

    def test_records_are_frozen(self) -> None:
        status = PrinterStatus(drawer_open=False)
        with pytest.raises(AttributeError):
            status.drawer_open = True  # type: ignore[misc]
