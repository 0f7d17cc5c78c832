"""
Itikaf registry over Google Sheets.

Four tabs across two spreadsheets are involved:

- ``Master Data`` (headers on row 5) on the Itikaf datasheet: the curated
  participant list.
- ``Histori Absensi`` on the same datasheet: one row per participant and one
  ``Malam ke N`` column per night.
- ``Pendaftaran`` and ``Keluarga`` on the online form sheet: raw
  registrations and the family members registered with them.

Only the quotas and the attendance window live in the database.
"""

from __future__ import annotations

import csv
import io
import logging
import re
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.ext.asyncio import AsyncSession

from careerconnect.core.database.base import utc_now
from careerconnect.core.database.entities import ItikafSetting
from careerconnect.core.database.repositories import ItikafSettingRepository
from careerconnect.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationFailedError,
)
from careerconnect.core.models.io.itikaf import ItikafSettingUpdate, KtpAddress, ParticipantCreate
from careerconnect.integrations import GoogleSheetsClient, normalize_header
from careerconnect.server.core.config import IntegrationConfig

logger = logging.getLogger(__name__)

MASTER_SHEET = "Master Data"
MASTER_HEADER_ROW = 5
ATTENDANCE_SHEET = "Histori Absensi"
FORM_SHEET = "Pendaftaran"
FAMILY_SHEET = "Keluarga"

NIGHTS = 10
PRESENT_MARK = "✔️"
ABSENT_MARK = "❌"
PRESENT_MARKS = {PRESENT_MARK, "✔", "✓"}
ABSENT_MARKS = {ABSENT_MARK, "✕", "✗"}

FORM_COLUMNS = [
    "nama",
    "jenis-kelamin",
    "tanggal-lahir",
    "usia",
    "no-hp_pribadi",
    "alamat_ktp",
    "alamat_domisili",
    "bersama",
    "nama_kontak-darurat",
    "no_kontak-darurat",
] + [f"h-{night}" for night in range(1, NIGHTS + 1)]

LOCAL_ADDRESS = re.compile(r"persada kemala|pk|gjs|jatiluhur|jakasampurna|pengairan", re.IGNORECASE)
TIME_FORMAT = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
JAKASAMPURNA = "Jakasampurna, Bekasi Barat, Kota Bekasi, Jawa Barat 17145"
EXPORT_HEADER = ["Name", "Gender", "Phone", "Address", "Registration Type"]

Row = Tuple[int, Dict[str, Any]]


def numbered_records(values: List[List[Any]], header_row: int = 1) -> List[Row]:
    """Like ``rows_to_records`` but keeps each record's 1-based sheet row number."""
    if len(values) < header_row:
        return []
    headers = [normalize_header(h) for h in values[header_row - 1]]
    records: List[Row] = []
    for offset, row in enumerate(values[header_row:], start=header_row + 1):
        if not any(str(cell).strip() for cell in row):
            continue
        padded = [str(cell) for cell in row] + [""] * (len(headers) - len(row))
        records.append((offset, dict(zip(headers, padded))))
    return records


def calculate_age(birth: date, today: date) -> int:
    had_birthday = (today.month, today.day) >= (birth.month, birth.day)
    return today.year - birth.year - (0 if had_birthday else 1)


def format_ktp_address(address: KtpAddress) -> str:
    if address.komplek == "Lainnya":
        return (
            f"{address.komplek_lainnya} {address.jalan}, {address.kelurahan}, {address.kecamatan}, "
            f"{address.kabupaten}, {address.propinsi} {address.kodepos}"
        )
    return f"{address.komplek} {address.jalan} {JAKASAMPURNA}"


def itikaf_night(start: date, today: date) -> int:
    """1 on the start date, 2 the day after, and so on."""
    return (today - start).days + 1


def parse_time(value: str) -> Tuple[int, int]:
    hours, minutes = value.split(":")
    return int(hours), int(minutes)


def attendance_open(setting: ItikafSetting, now: datetime) -> bool:
    """Whether ``now`` falls inside the window. A window whose close time is
    earlier than its open time runs past midnight."""
    current = (now.hour, now.minute)
    opens = parse_time(setting.attendance_open_time)
    closes = parse_time(setting.attendance_close_time)
    if opens <= closes:
        return opens <= current < closes
    return current >= opens or current < closes


def registration_type(address: str) -> str:
    if not address:
        return "Unknown"
    lowered = address.lower()
    if "persada" in lowered:
        return "Local - Persada"
    if "pengairan" in lowered:
        return "Local - Pengairan"
    return "Other Location"


def local_now(timezone: str) -> datetime:
    return datetime.now(ZoneInfo(timezone))


class ItikafService:
    def __init__(self, session: AsyncSession, sheets: GoogleSheetsClient, config: IntegrationConfig):
        self.session = session
        self.sheets = sheets
        self.config = config
        self.settings = ItikafSettingRepository(session)

    @property
    def datasheet_id(self) -> str:
        if not self.config.itikaf_datasheet_id:
            raise ServiceUnavailableError("Itikaf datasheet is not configured")
        return self.config.itikaf_datasheet_id

    @property
    def form_sheet_id(self) -> str:
        if not self.config.itikaf_form_sheet_id:
            raise ServiceUnavailableError("Itikaf registration sheet is not configured")
        return self.config.itikaf_form_sheet_id

    async def _master_rows(self) -> List[Row]:
        values = await self.sheets.get_values(self.datasheet_id, MASTER_SHEET)
        return [(n, r) for n, r in numbered_records(values, MASTER_HEADER_ROW) if r.get("nama_lengkap")]

    async def _attendance(self) -> Tuple[List[str], List[Row]]:
        values = await self.sheets.get_values(self.datasheet_id, ATTENDANCE_SHEET)
        headers = [str(h).strip() for h in values[0]] if values else []
        return headers, numbered_records(values)

    # Participants

    async def list_participants(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": number,
                "name": row["nama_lengkap"],
                "sex": row.get("jenis_kelamin", ""),
                "bod": row.get("tanggal_lahir", ""),
                "age": row.get("usia", ""),
                "phone": row.get("no._hp_pribadi", ""),
                "alamat_ktp": row.get("alamat_ktp", ""),
                "alamat_domisili": row.get("alamat_domisili", ""),
                "bersama": row.get("i'tikaf_bersama", ""),
                "emergency_contact": {
                    "name": row.get("nama_kontak_darurat", ""),
                    "phone": row.get("kontak_darurat", ""),
                },
            }
            for number, row in await self._master_rows()
        ]

    async def add_participant(self, payload: ParticipantCreate, today: Optional[date] = None) -> Dict[str, Any]:
        """Append a registration to the form sheet, plus one row per family member."""
        if not payload.nama or not payload.nama.strip():
            raise ValidationFailedError("nama is required")
        if payload.tanggal_lahir is None or payload.alamat_ktp is None or not payload.no_hp:
            raise ValidationFailedError("tanggal_lahir, no_hp and alamat_ktp are required")
        invalid_nights = [n for n in payload.rencana_itikaf if not 1 <= n <= NIGHTS]
        if invalid_nights:
            raise ValidationFailedError(f"rencana_itikaf nights must be between 1 and {NIGHTS}")

        today = today or local_now(self.config.itikaf_timezone).date()
        nama = payload.nama.strip()
        phone = payload.no_hp if payload.no_hp.startswith("0") else f"0{payload.no_hp}"
        planned = set(payload.rencana_itikaf)
        record: Dict[str, Any] = {
            "nama": nama,
            "jenis-kelamin": payload.jenis_kelamin or "",
            "tanggal-lahir": payload.tanggal_lahir.isoformat(),
            "usia": calculate_age(payload.tanggal_lahir, today),
            "no-hp_pribadi": phone,
            "alamat_ktp": format_ktp_address(payload.alamat_ktp),
            "alamat_domisili": "sama dengan ktp" if payload.equal_ktp else payload.alamat_dom,
            "bersama": "bersama" if payload.dengan_keluarga else "sendiri",
            "nama_kontak-darurat": payload.kontak_darurat.nama,
            "no_kontak-darurat": payload.kontak_darurat.phone1,
        }
        record.update({f"h-{night}": "✔" if night in planned else "" for night in range(1, NIGHTS + 1)})

        updates = await self.sheets.append_row(self.form_sheet_id, FORM_SHEET, [record[c] for c in FORM_COLUMNS])
        match = re.search(r"![A-Z]+(\d+)", updates.get("updatedRange", ""))
        row_number = match.group(1) if match else None

        if payload.dengan_keluarga:
            for member in payload.anggota:
                member_row = [nama, member.nama, member.hubungan, member.jenis_kelamin, member.usia or ""]
                await self.sheets.append_row(self.form_sheet_id, FAMILY_SHEET, member_row)

        logger.info(f"Itikaf registration for {nama} with {len(payload.anggota)} family members")
        return {
            "message": "Data received successfully",
            "user": {"id": row_number, "name": nama, "sex": payload.jenis_kelamin, "wa": payload.no_hp},
            "success": True,
        }

    async def delete_participant(self, participant_id: int) -> None:
        if participant_id not in {number for number, _ in await self._master_rows()}:
            raise NotFoundError("Participant not found")
        await self.sheets.delete_row(self.datasheet_id, MASTER_SHEET, participant_id)
        logger.info(f"Deleted Itikaf participant on master row {participant_id}")

    # Settings

    async def get_settings(self) -> ItikafSetting:
        """Current settings, created with defaults on first use."""
        setting = await self.settings.get_current()
        if setting is None:
            today = local_now(self.config.itikaf_timezone).date()
            setting = await self.settings.create(
                ItikafSetting(
                    registration_open_date=today,
                    registration_closed_date=today + timedelta(days=NIGHTS),
                    itikaf_start_date=today,
                )
            )
        return setting

    async def update_settings(self, payload: ItikafSettingUpdate) -> ItikafSetting:
        required = (
            payload.itikaf_start_date,
            payload.attendance_open_time,
            payload.attendance_close_time,
            payload.registration_open_date,
            payload.registration_closed_date,
        )
        if any(value is None or value == "" for value in required):
            raise ValidationFailedError("All fields are required")
        if not TIME_FORMAT.match(payload.attendance_open_time) or not TIME_FORMAT.match(
            payload.attendance_close_time
        ):
            raise ValidationFailedError("Time must be in HH:MM format")
        if payload.registration_closed_date < payload.registration_open_date:
            raise ValidationFailedError("registration_closed_date must not be before registration_open_date")

        setting = await self.get_settings()
        for key, value in payload.model_dump().items():
            if value is not None:
                setattr(setting, key, value)
        setting.updated_at = utc_now()
        return await self.settings.update(setting)

    # Attendance

    async def mark_attendance(self, nama: str, check: bool, now: Optional[datetime] = None) -> Dict[str, Any]:
        setting = await self.get_settings()
        now = now or local_now(self.config.itikaf_timezone)
        if not attendance_open(setting, now):
            raise ForbiddenError("Daftarulang sedang ditutup")
        night = itikaf_night(setting.itikaf_start_date, now.date())
        if not 1 <= night <= NIGHTS:
            raise ConflictError(f"Current night {night} is outside the {NIGHTS}-night itikaf period")
        column_name = f"Malam ke {night}"

        headers, rows = await self._attendance()
        if column_name not in headers:
            raise NotFoundError(f'Column "{column_name}" not found on {ATTENDANCE_SHEET}')
        row_number = next((number for number, row in rows if row.get("nama_lengkap") == nama), None)
        if row_number is None:
            raise NotFoundError(f"User {nama} not found")

        await self.sheets.update_cell(
            self.datasheet_id,
            ATTENDANCE_SHEET,
            row_number,
            headers.index(column_name),
            PRESENT_MARK if check else ABSENT_MARK,
        )
        return {
            "success": True,
            "date": now.isoformat(),
            "participant": nama,
            "status": "present" if check else "absent",
            "updatedField": column_name,
        }

    async def attendance_history(self, nama: str, today: Optional[date] = None) -> Dict[str, str]:
        """Marks of every night up to today; unmarked nights are a single space."""
        setting = await self.get_settings()
        today = today or local_now(self.config.itikaf_timezone).date()
        nights = max(0, min(NIGHTS, itikaf_night(setting.itikaf_start_date, today)))

        _, rows = await self._attendance()
        record = next((row for _, row in rows if row.get("nama_lengkap") == nama), None)
        if record is None:
            raise NotFoundError(f"User {nama} not found")

        history = {"Nama Lengkap": nama}
        for night in range(1, nights + 1):
            history[f"Malam ke {night}"] = record.get(normalize_header(f"Malam ke {night}")) or " "
        return history

    # Statistics

    async def statistics(self) -> Dict[str, Any]:
        stats: Dict[str, Any] = {
            "total": 0,
            "gender": {"male": 0, "female": 0},
            "location": {"local": 0, "other": 0},
            "registeredLocalMale": 0,
            "registeredLocalFemale": 0,
            "registeredOutsideMale": 0,
            "registeredOutsideFemale": 0,
        }
        for _, row in await self._master_rows():
            stats["total"] += 1
            gender = row.get("jenis_kelamin", "").lower()
            is_male, is_female = gender == "laki-laki", gender == "perempuan"
            if is_male:
                stats["gender"]["male"] += 1
            elif is_female:
                stats["gender"]["female"] += 1

            is_local = bool(
                LOCAL_ADDRESS.search(row.get("alamat_ktp", "")) or LOCAL_ADDRESS.search(row.get("alamat_domisili", ""))
            )
            stats["location"]["local" if is_local else "other"] += 1
            prefix = "registeredLocal" if is_local else "registeredOutside"
            if is_male:
                stats[f"{prefix}Male"] += 1
            elif is_female:
                stats[f"{prefix}Female"] += 1
        return stats

    async def detailed_statistics(self) -> Dict[str, Any]:
        master = await self._master_rows()
        form_values = await self.sheets.get_values(self.form_sheet_id, FORM_SHEET)
        family_values = await self.sheets.get_values(self.form_sheet_id, FAMILY_SHEET)
        headers, attendance_rows = await self._attendance()

        participants: Dict[str, Any] = {
            "total": len(master),
            "registered": 0,
            "withFamily": 0,
            "familyMembers": len(numbered_records(family_values)),
            "gender": {"male": 0, "female": 0, "unknown": 0},
            "location": {"local": {"persada": 0, "pengairan": 0, "total": 0}, "other": 0},
        }
        for _, row in master:
            gender = row.get("jenis_kelamin", "").lower()
            key = {"laki-laki": "male", "perempuan": "female"}.get(gender, "unknown")
            participants["gender"][key] += 1

        for _, row in numbered_records(form_values):
            if not row.get("nama"):
                continue
            participants["registered"] += 1
            if row.get("bersama") == "bersama":
                participants["withFamily"] += 1
            address = row.get("alamat_ktp", "").lower()
            if "persada" in address:
                participants["location"]["local"]["persada"] += 1
                participants["location"]["local"]["total"] += 1
            elif "pengairan" in address:
                participants["location"]["local"]["pengairan"] += 1
                participants["location"]["local"]["total"] += 1
            else:
                participants["location"]["other"] += 1

        nights = [h for h in headers if h.startswith("Malam ke")]
        by_night = {night: {"present": 0, "absent": 0, "total": 0} for night in nights}
        for _, row in attendance_rows:
            for night in nights:
                mark = row.get(normalize_header(night), "").strip()
                by_night[night]["total"] += 1
                if mark in PRESENT_MARKS:
                    by_night[night]["present"] += 1
                elif mark in ABSENT_MARKS:
                    by_night[night]["absent"] += 1

        return {
            "participants": participants,
            "attendance": {
                "total": len(attendance_rows),
                "present": sum(n["present"] for n in by_night.values()),
                "absent": sum(n["absent"] for n in by_night.values()),
                "byNight": by_night,
            },
        }

    async def export_csv(self) -> str:
        """One line per master participant, enriched with the phone and address they registered with."""
        master = await self._master_rows()
        form_values = await self.sheets.get_values(self.form_sheet_id, FORM_SHEET)
        form = {row.get("nama"): row for _, row in numbered_records(form_values)}

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(EXPORT_HEADER)
        for _, row in master:
            name = row["nama_lengkap"]
            registration = form.get(name, {})
            address = registration.get("alamat_ktp", "")
            writer.writerow(
                [
                    name,
                    row.get("jenis_kelamin", ""),
                    registration.get("no-hp_pribadi", ""),
                    address,
                    registration_type(address),
                ]
            )
        return buffer.getvalue()
