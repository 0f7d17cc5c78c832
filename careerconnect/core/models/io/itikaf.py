"""
Itikaf registry I/O models.

Participants and attendance live in Google Sheets; only the settings row is
stored in the database.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class EmergencyContact(BaseModel):
    name: str = ""
    phone: str = ""


class ParticipantRead(BaseModel):
    """``id`` is the participant's row number on the master sheet."""

    id: int
    name: str
    sex: str = ""
    bod: str = ""
    age: str = ""
    phone: str = ""
    alamat_ktp: str = ""
    alamat_domisili: str = ""
    bersama: str = ""
    emergency_contact: EmergencyContact


class KtpAddress(BaseModel):
    komplek: str = ""
    komplek_lainnya: str = ""
    jalan: str = ""
    kelurahan: str = ""
    kecamatan: str = ""
    kabupaten: str = ""
    propinsi: str = ""
    kodepos: str = ""


class FamilyMember(BaseModel):
    nama: str
    hubungan: str = ""
    jenis_kelamin: str = ""
    usia: Optional[int] = None


class EmergencyContactInput(BaseModel):
    nama: str = ""
    phone1: str = ""


class ParticipantCreate(BaseModel):
    nama: Optional[str] = None
    jenis_kelamin: Optional[str] = None
    tanggal_lahir: Optional[date] = None
    no_hp: Optional[str] = None
    dengan_keluarga: bool = False
    alamat_ktp: Optional[KtpAddress] = None
    equal_ktp: bool = False
    alamat_dom: str = ""
    anggota: List[FamilyMember] = Field(default_factory=list)
    kontak_darurat: EmergencyContactInput = Field(default_factory=EmergencyContactInput)
    rencana_itikaf: List[int] = Field(default_factory=list, description="Nights (1-10) the participant plans to stay")


class AttendanceMark(BaseModel):
    check: Optional[bool] = None


class ItikafSettingRead(BaseModel):
    id: int
    local_quota: int
    free_quota: int
    woman_ratio: str
    registration_open_date: date
    registration_closed_date: date
    itikaf_start_date: date
    attendance_open_time: str
    attendance_close_time: str
    updated_at: datetime

    class Config:
        from_attributes = True


class ItikafSettingUpdate(BaseModel):
    itikaf_start_date: Optional[date] = None
    attendance_open_time: Optional[str] = None
    attendance_close_time: Optional[str] = None
    registration_open_date: Optional[date] = None
    registration_closed_date: Optional[date] = None
    local_quota: Optional[int] = None
    free_quota: Optional[int] = None
    woman_ratio: Optional[str] = None

