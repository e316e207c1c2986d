"""Tests for kost_common.enums — values must match DB CHECK constraints."""

from src.kost_common.enums import BalanceStatus, RoomStatus


class TestRoomStatus:
    def test_is_str(self) -> None:
        assert isinstance(RoomStatus.AVAILABLE, str)
        assert RoomStatus.AVAILABLE == "available"

    def test_all_values(self) -> None:
        expected = {"available", "occupied", "under_renovation"}
        assert {s.value for s in RoomStatus} == expected


class TestBalanceStatus:
    def test_all_values(self) -> None:
        assert {s.value for s in BalanceStatus} == {"paid", "unpaid"}

    def test_lookup_by_value(self) -> None:
        assert BalanceStatus("unpaid") is BalanceStatus.UNPAID
