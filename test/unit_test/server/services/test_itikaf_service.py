"""Unit tests for the Itikaf registry helpers."""

from datetime import date, datetime

import pytest

from careerconnect.core.database.entities import ItikafSetting
from careerconnect.core.models.io.itikaf import KtpAddress
from careerconnect.server.services.itikaf import (
    attendance_open,
    calculate_age,
    format_ktp_address,
    itikaf_night,
    numbered_records,
    registration_type,
)


@pytest.mark.parametrize(
    "birth,today,expected",
    [
        (date(1990, 5, 10), date(2025, 5, 9), 34),
        (date(1990, 5, 10), date(2025, 5, 10), 35),
        (date(2000, 2, 29), date(2025, 3, 1), 25),
    ],
)
def test_calculate_age(birth, today, expected):
    assert calculate_age(birth, today) == expected


@pytest.mark.parametrize(
    "today,expected",
    [(date(2025, 3, 20), 1), (date(2025, 3, 29), 10), (date(2025, 3, 19), 0), (date(2025, 3, 30), 11)],
)
def test_itikaf_night(today, expected):
    assert itikaf_night(date(2025, 3, 20), today) == expected


class TestAttendanceWindow:
    @pytest.mark.parametrize(
        "hour,minute,expected",
        [(7, 59, False), (8, 0, True), (21, 59, True), (22, 0, False)],
    )
    def test_same_day(self, hour, minute, expected):
        setting = ItikafSetting(attendance_open_time="08:00", attendance_close_time="22:00")
        assert attendance_open(setting, datetime(2025, 3, 21, hour, minute)) is expected

    @pytest.mark.parametrize(
        "hour,minute,expected",
        [(17, 59, False), (18, 0, True), (23, 30, True), (3, 59, True), (4, 0, False), (12, 0, False)],
    )
    def test_past_midnight(self, hour, minute, expected):
        setting = ItikafSetting(attendance_open_time="18:00", attendance_close_time="04:00")
        assert attendance_open(setting, datetime(2025, 3, 21, hour, minute)) is expected


class TestKtpAddress:
    def test_inside_the_complex(self):
        address = KtpAddress(komplek="Pengairan", jalan="Blok D No. 1")
        assert format_ktp_address(address) == (
            "Pengairan Blok D No. 1 Jakasampurna, Bekasi Barat, Kota Bekasi, Jawa Barat 17145"
        )

    def test_elsewhere(self):
        address = KtpAddress(
            komplek="Lainnya",
            komplek_lainnya="Griya Asri",
            jalan="Jl. Melati 2",
            kelurahan="Cibubur",
            kecamatan="Ciracas",
            kabupaten="Jakarta Timur",
            propinsi="DKI Jakarta",
            kodepos="13720",
        )
        assert format_ktp_address(address) == (
            "Griya Asri Jl. Melati 2, Cibubur, Ciracas, Jakarta Timur, DKI Jakarta 13720"
        )


def test_numbered_records_keep_sheet_rows():
    values = [["Title"], [], ["Nama Lengkap", "Usia"], ["Ahmad", 35], [], ["Budi"]]
    assert numbered_records(values, header_row=3) == [
        (4, {"nama_lengkap": "Ahmad", "usia": "35"}),
        (6, {"nama_lengkap": "Budi", "usia": ""}),
    ]
    assert numbered_records([["Title"]], header_row=3) == []


@pytest.mark.parametrize(
    "address,expected",
    [
        ("", "Unknown"),
        ("PERSADA KEMALA Blok A", "Local - Persada"),
        ("Komplek Pengairan", "Local - Pengairan"),
        ("Bandung", "Other Location"),
    ],
)
def test_registration_type(address, expected):
    assert registration_type(address) == expected
