"""Unit tests for the Itikaf registry endpoints, backed by an in-memory Sheets API."""

import copy
import json
import re
from datetime import datetime

import httpx
import pytest

from careerconnect.core.grouping import group_index
from careerconnect.integrations import GoogleSheetsClient
from careerconnect.server.core.config import settings
from careerconnect.server.services import itikaf as itikaf_service
from careerconnect.server.services.deps import get_sheets_client

BASE = "/api/v1/itikaf"

MASTER = [
    ["Daftar Peserta I'tikaf 1446H"],
    [],
    [],
    [],
    [
        "No",
        "Nama Lengkap",
        "Jenis Kelamin",
        "Tanggal Lahir",
        "Usia",
        "No. HP Pribadi",
        "Alamat KTP",
        "Alamat Domisili",
        "I'tikaf Bersama",
        "Nama Kontak Darurat",
        "Kontak Darurat",
    ],
    ["1", "Ahmad Fauzi", "Laki-laki", "1990-02-01", "35", "08123", "Persada Kemala Blok A", "sama dengan ktp",
     "sendiri", "Siti", "0811"],
    ["2", "Siti Aminah", "Perempuan", "1992-05-05", "33", "08124", "Jl. Merdeka, Jakarta", "Jl. Merdeka",
     "bersama", "Budi", "0812"],
    ["3", ""],
    ["4", "Budi Santoso", "Laki-laki", "", "", "", "Bandung", "GJS Blok C", "sendiri"],
]

ATTENDANCE = [
    ["Nama Lengkap", "Malam ke 1", "Malam ke 2", "Malam ke 3"],
    ["Ahmad Fauzi", "✔️", "❌"],
    ["Siti Aminah", "✓", "", ""],
]

FORM = [
    itikaf_service.FORM_COLUMNS,
    ["Ahmad Fauzi", "Laki-laki", "1990-02-01", "35", "08123", "Persada Kemala Blok A", "sama dengan ktp", "sendiri"],
    ["Siti Aminah", "Perempuan", "1992-05-05", "33", "08124", "Jl. Merdeka, Jakarta", "Jl. Merdeka", "bersama"],
    ["Rina", "Perempuan", "2000-01-01", "25", "08125", "Pengairan Blok D", "sama dengan ktp", "sendiri"],
]

FAMILY = [
    ["pendaftar", "nama", "hubungan", "jenis_kelamin", "usia"],
    ["Siti Aminah", "Umar", "anak", "Laki-laki", "7"],
]


class FakeSpreadsheets:
    """Just enough of the Sheets v4 API: values get/append/update and row deletion."""

    def __init__(self):
        self.books = {
            "DATA": {"Master Data": copy.deepcopy(MASTER), "Histori Absensi": copy.deepcopy(ATTENDANCE)},
            "FORM": {"Pendaftaran": copy.deepcopy(FORM), "Keluarga": copy.deepcopy(FAMILY)},
        }
        self.status = 200
        self.tokens = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.tokens.append(request.headers.get("Authorization"))
        if self.status != 200:
            return httpx.Response(self.status, text="upstream down")
        path = request.url.path.removeprefix("/v4/spreadsheets/")

        if "/values/" in path:
            book_id, range_ = path.split("/values/", 1)
            book = self.books[book_id]
            if request.method == "GET":
                if range_ not in book:
                    return httpx.Response(404)
                return httpx.Response(200, json={"values": book[range_]})
            body = json.loads(request.content)
            if range_.endswith(":append"):
                tab = range_[: -len(":append")]
                book[tab].append(body["values"][0])
                row = len(book[tab])
                return httpx.Response(200, json={"updates": {"updatedRange": f"'{tab}'!A{row}:T{row}"}})
            tab, cell = range_.split("!")
            column, row = re.match(r"([A-Z]+)(\d+)", cell).groups()
            values = book[tab.strip("'")][int(row) - 1]
            index = group_index(column)
            values.extend([""] * (index + 1 - len(values)))
            values[index] = body["values"][0][0]
            return httpx.Response(200, json={})

        if path.endswith(":batchUpdate"):
            book = self.books[path[: -len(":batchUpdate")]]
            span = json.loads(request.content)["requests"][0]["deleteDimension"]["range"]
            tab = list(book)[span["sheetId"]]
            del book[tab][span["startIndex"]: span["endIndex"]]
            return httpx.Response(200, json={})

        book = self.books[path]
        return httpx.Response(
            200, json={"sheets": [{"properties": {"title": title, "sheetId": i}} for i, title in enumerate(book)]}
        )


@pytest.fixture(autouse=True)
def _signed_in(signed_in_client):
    """Requests in this module come from a committee admin."""


@pytest.fixture
def sheets(client, monkeypatch):
    from careerconnect.server.main import app

    fake = FakeSpreadsheets()
    monkeypatch.setattr(settings, "itikaf_datasheet_id", "DATA")
    monkeypatch.setattr(settings, "itikaf_form_sheet_id", "FORM")
    app.dependency_overrides[get_sheets_client] = lambda: GoogleSheetsClient(
        "read-key",
        access_token="sheet-token",
        base_url="https://mock.sheets/v4/spreadsheets",
        client=httpx.AsyncClient(transport=httpx.MockTransport(fake.handler)),
    )
    return fake


@pytest.fixture
def clock(monkeypatch):
    """Local Itikaf time seen by the service; tests move ``clock["now"]``."""
    state = {"now": datetime(2025, 3, 21, 20, 0)}
    monkeypatch.setattr(itikaf_service, "local_now", lambda timezone: state["now"])
    return state


async def configure(client, **overrides):
    body = {
        "itikaf_start_date": "2025-03-20",
        "attendance_open_time": "18:00",
        "attendance_close_time": "04:00",
        "registration_open_date": "2025-03-01",
        "registration_closed_date": "2025-03-19",
        **overrides,
    }
    response = await client.put(f"{BASE}/settings", json=body)
    assert response.status_code == 200
    return response.json()


class TestParticipants:
    async def test_list_skips_rows_without_a_name(self, client, sheets):
        response = await client.get(f"{BASE}/participants")
        assert response.status_code == 200
        body = response.json()
        assert [(p["id"], p["name"]) for p in body] == [(6, "Ahmad Fauzi"), (7, "Siti Aminah"), (9, "Budi Santoso")]
        assert body[0] == {
            "id": 6,
            "name": "Ahmad Fauzi",
            "sex": "Laki-laki",
            "bod": "1990-02-01",
            "age": "35",
            "phone": "08123",
            "alamat_ktp": "Persada Kemala Blok A",
            "alamat_domisili": "sama dengan ktp",
            "bersama": "sendiri",
            "emergency_contact": {"name": "Siti", "phone": "0811"},
        }
        assert set(sheets.tokens) == {"Bearer sheet-token"}

    async def test_add_registration_with_family(self, client, sheets, clock):
        response = await client.post(
            f"{BASE}/participants/add",
            json={
                "nama": " Hasan ",
                "jenis_kelamin": "Laki-laki",
                "tanggal_lahir": "1990-05-10",
                "no_hp": "8129",
                "dengan_keluarga": True,
                "alamat_ktp": {"komplek": "Persada Kemala", "jalan": "Blok B No. 3"},
                "equal_ktp": True,
                "anggota": [{"nama": "Fatimah", "hubungan": "istri", "jenis_kelamin": "Perempuan"}],
                "kontak_darurat": {"nama": "Aisyah", "phone1": "0813"},
                "rencana_itikaf": [1, 2],
            },
        )
        assert response.status_code == 201
        assert response.json() == {
            "message": "Data received successfully",
            "user": {"id": "5", "name": "Hasan", "sex": "Laki-laki", "wa": "8129"},
            "success": True,
        }

        form = sheets.books["FORM"]["Pendaftaran"]
        assert form[-1] == [
            "Hasan",
            "Laki-laki",
            "1990-05-10",
            34,
            "08129",
            "Persada Kemala Blok B No. 3 Jakasampurna, Bekasi Barat, Kota Bekasi, Jawa Barat 17145",
            "sama dengan ktp",
            "bersama",
            "Aisyah",
            "0813",
        ] + ["✔", "✔"] + [""] * 8
        assert sheets.books["FORM"]["Keluarga"][-1] == ["Hasan", "Fatimah", "istri", "Perempuan", ""]

    async def test_address_outside_the_complex(self, client, sheets, clock):
        await client.post(
            f"{BASE}/participants/add",
            json={
                "nama": "Yusuf",
                "tanggal_lahir": "2001-01-01",
                "no_hp": "0812",
                "alamat_ktp": {
                    "komplek": "Lainnya",
                    "komplek_lainnya": "Perum Griya",
                    "jalan": "Jl. Kenanga 1",
                    "kelurahan": "Margahayu",
                    "kecamatan": "Bekasi Timur",
                    "kabupaten": "Kota Bekasi",
                    "propinsi": "Jawa Barat",
                    "kodepos": "17113",
                },
                "alamat_dom": "Asrama Mahasiswa",
                "anggota": [{"nama": "Ignored"}],
            },
        )
        row = sheets.books["FORM"]["Pendaftaran"][-1]
        assert row[5] == "Perum Griya Jl. Kenanga 1, Margahayu, Bekasi Timur, Kota Bekasi, Jawa Barat 17113"
        assert row[6:8] == ["Asrama Mahasiswa", "sendiri"]
        assert len(sheets.books["FORM"]["Keluarga"]) == len(FAMILY)

    @pytest.mark.parametrize(
        "payload,detail",
        [
            ({"nama": " "}, "nama is required"),
            ({"nama": "Hasan"}, "tanggal_lahir, no_hp and alamat_ktp are required"),
            (
                {"nama": "Hasan", "tanggal_lahir": "1990-01-01", "no_hp": "1", "alamat_ktp": {}, "rencana_itikaf": [11]},
                "rencana_itikaf nights must be between 1 and 10",
            ),
        ],
    )
    async def test_add_validation(self, client, sheets, payload, detail):
        response = await client.post(f"{BASE}/participants/add", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == detail

    async def test_delete_by_row(self, client, sheets):
        response = await client.delete(f"{BASE}/participants/7/delete")
        assert response.json() == {"message": "Participant deleted successfully"}
        names = [p["name"] for p in (await client.get(f"{BASE}/participants")).json()]
        assert names == ["Ahmad Fauzi", "Budi Santoso"]

    @pytest.mark.parametrize("row", [5, 8, 42])
    async def test_delete_requires_a_participant_row(self, client, sheets, row):
        response = await client.delete(f"{BASE}/participants/{row}/delete")
        assert response.status_code == 404
        assert len(sheets.books["DATA"]["Master Data"]) == len(MASTER)

    async def test_delete_is_admin_only(self, client, sheets, applicant_headers):
        response = await client.delete(f"{BASE}/participants/6/delete", headers=applicant_headers)
        assert response.status_code == 403

    async def test_sheets_not_configured(self, client, sheets, monkeypatch):
        monkeypatch.setattr(settings, "itikaf_datasheet_id", None)
        response = await client.get(f"{BASE}/participants")
        assert response.status_code == 503
        assert response.json()["detail"] == "Itikaf datasheet is not configured"

    async def test_upstream_failure(self, client, sheets):
        sheets.status = 500
        response = await client.get(f"{BASE}/participants")
        assert response.status_code == 502


class TestSettings:
    async def test_defaults_created_on_first_read(self, client, clock):
        body = (await client.get(f"{BASE}/settings")).json()
        assert body["local_quota"] == 100
        assert body["woman_ratio"] == "40%"
        assert body["attendance_open_time"] == "08:00"
        assert body["itikaf_start_date"] == "2025-03-21"
        assert body["registration_closed_date"] == "2025-03-31"

    async def test_update(self, client, clock):
        body = await configure(client, local_quota=150)
        assert body["itikaf_start_date"] == "2025-03-20"
        assert body["local_quota"] == 150
        assert body["free_quota"] == 100
        assert (await client.get(f"{BASE}/settings")).json()["attendance_close_time"] == "04:00"

    async def test_all_dates_and_times_required(self, client, clock):
        response = await client.put(f"{BASE}/settings", json={"itikaf_start_date": "2025-03-20"})
        assert response.status_code == 400
        assert response.json()["detail"] == "All fields are required"

    async def test_time_format(self, client, clock):
        response = await client.put(
            f"{BASE}/settings",
            json={
                "itikaf_start_date": "2025-03-20",
                "attendance_open_time": "25:00",
                "attendance_close_time": "04:00",
                "registration_open_date": "2025-03-01",
                "registration_closed_date": "2025-03-19",
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Time must be in HH:MM format"

    async def test_update_is_admin_only(self, client, clock, applicant_headers):
        response = await client.put(f"{BASE}/settings", json={}, headers=applicant_headers)
        assert response.status_code == 403


class TestAttendance:
    async def test_marks_tonight(self, client, sheets, clock):
        await configure(client)

        response = await client.post(f"{BASE}/attendance/Ahmad Fauzi", json={"check": True})
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "date": "2025-03-21T20:00:00",
            "participant": "Ahmad Fauzi",
            "status": "present",
            "updatedField": "Malam ke 2",
        }
        assert sheets.books["DATA"]["Histori Absensi"][1] == ["Ahmad Fauzi", "✔️", "✔️"]

    async def test_window_past_midnight(self, client, sheets, clock):
        await configure(client)
        clock["now"] = datetime(2025, 3, 22, 3, 30)
        response = await client.post(f"{BASE}/attendance/Siti Aminah", json={"check": False})
        assert response.json()["updatedField"] == "Malam ke 3"
        assert sheets.books["DATA"]["Histori Absensi"][2][3] == "❌"

    async def test_closed_window(self, client, sheets, clock):
        await configure(client)
        clock["now"] = datetime(2025, 3, 21, 12, 0)
        response = await client.post(f"{BASE}/attendance/Ahmad Fauzi", json={"check": True})
        assert response.status_code == 403
        assert response.json()["detail"] == "Daftarulang sedang ditutup"

    async def test_outside_the_ten_nights(self, client, sheets, clock):
        await configure(client, itikaf_start_date="2025-03-01")
        response = await client.post(f"{BASE}/attendance/Ahmad Fauzi", json={"check": True})
        assert response.status_code == 409
        assert response.json()["detail"] == "Current night 21 is outside the 10-night itikaf period"

    async def test_unknown_participant(self, client, sheets, clock):
        await configure(client)
        response = await client.post(f"{BASE}/attendance/Zaid", json={"check": True})
        assert response.status_code == 404
        assert response.json()["detail"] == "User Zaid not found"

    async def test_check_required(self, client, sheets, clock):
        response = await client.post(f"{BASE}/attendance/Ahmad Fauzi", json={})
        assert response.status_code == 400

    async def test_participants_mark_only_themselves(self, client, sheets, clock, make_user, auth_headers):
        await configure(client)
        siti = auth_headers(await make_user(email="siti@example.com", name="Siti Aminah"))

        other = await client.post(f"{BASE}/attendance/Ahmad Fauzi", json={"check": True}, headers=siti)
        assert other.status_code == 403
        own = await client.post(f"{BASE}/attendance/Siti Aminah", json={"check": True}, headers=siti)
        assert own.status_code == 200

    async def test_history_up_to_tonight(self, client, sheets, clock):
        await configure(client)
        clock["now"] = datetime(2025, 3, 22, 21, 0)
        response = await client.get(f"{BASE}/attendance/history/Ahmad Fauzi")
        assert response.json() == {
            "Nama Lengkap": "Ahmad Fauzi",
            "Malam ke 1": "✔️",
            "Malam ke 2": "❌",
            "Malam ke 3": " ",
        }

    async def test_history_of_someone_else(self, client, sheets, clock, applicant_headers):
        response = await client.get(f"{BASE}/attendance/history/Ahmad Fauzi", headers=applicant_headers)
        assert response.status_code == 403


class TestStatistics:
    async def test_summary(self, client, sheets):
        response = await client.get(f"{BASE}/statistics")
        assert response.json() == {
            "total": 3,
            "gender": {"male": 2, "female": 1},
            "location": {"local": 2, "other": 1},
            "registeredLocalMale": 2,
            "registeredLocalFemale": 0,
            "registeredOutsideMale": 0,
            "registeredOutsideFemale": 1,
        }

    async def test_detailed(self, client, sheets):
        body = (await client.get(f"{BASE}/statistics/detailed")).json()
        assert body["participants"] == {
            "total": 3,
            "registered": 3,
            "withFamily": 1,
            "familyMembers": 1,
            "gender": {"male": 2, "female": 1, "unknown": 0},
            "location": {"local": {"persada": 1, "pengairan": 1, "total": 2}, "other": 1},
        }
        assert body["attendance"] == {
            "total": 2,
            "present": 2,
            "absent": 1,
            "byNight": {
                "Malam ke 1": {"present": 2, "absent": 0, "total": 2},
                "Malam ke 2": {"present": 0, "absent": 1, "total": 2},
                "Malam ke 3": {"present": 0, "absent": 0, "total": 2},
            },
        }

    async def test_export_csv(self, client, sheets):
        response = await client.get(f"{BASE}/statistics/export")
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == "attachment; filename=participant_statistics.csv"
        assert response.text.splitlines() == [
            "Name,Gender,Phone,Address,Registration Type",
            "Ahmad Fauzi,Laki-laki,08123,Persada Kemala Blok A,Local - Persada",
            'Siti Aminah,Perempuan,08124,"Jl. Merdeka, Jakarta",Other Location',
            "Budi Santoso,Laki-laki,,,Unknown",
        ]
