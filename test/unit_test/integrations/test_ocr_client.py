"""Unit tests for the OCR client and the identity card text parser."""

import base64

import httpx
import pytest

from careerconnect.core.errors import OcrApiError
from careerconnect.integrations import IdCardDataExtractor, LlamaOcrClient


def make_client(handler) -> LlamaOcrClient:
    return LlamaOcrClient(
        "ocr-key",
        endpoint="https://mock.ocr/v1/extract/",
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


class TestLlamaOcrClient:
    async def test_extract_text_splits_lines(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            import json

            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"text": "NIK 1\n\n  \nNama X"})

        lines = await make_client(handler).extract_text(b"img", "image/png")
        assert lines == ["NIK 1", "Nama X"]
        assert seen["path"] == "/v1/extract"
        assert seen["body"]["image"] == base64.b64encode(b"img").decode("ascii")
        assert seen["body"]["content_type"] == "image/png"

    async def test_extract_structured_aliases(self):
        client = make_client(
            lambda r: httpx.Response(200, json={"fields": {"document_number": "1234", "sex": "PEREMPUAN"}})
        )
        data = await client.extract_structured(b"img")
        assert data.nik == "1234"
        assert data.jenis_kelamin == "PEREMPUAN"
        assert data.nama is None

    async def test_extract_structured_without_fields(self):
        client = make_client(lambda r: httpx.Response(200, json={"fields": {}}))
        with pytest.raises(OcrApiError, match="returned no fields"):
            await client.extract_structured(b"img")

    async def test_error_reason_from_body(self):
        client = make_client(lambda r: httpx.Response(401, json={"error": "invalid key"}))
        with pytest.raises(OcrApiError) as exc_info:
            await client.extract_text(b"img")
        assert str(exc_info.value) == "Llama-OCR API error: invalid key"
        assert exc_info.value.status_code == 401

    async def test_error_reason_without_json(self):
        client = make_client(lambda r: httpx.Response(500, text="oops"))
        with pytest.raises(OcrApiError, match="Internal Server Error"):
            await client.extract_text(b"img")


class TestIdCardDataExtractor:
    def test_full_card(self):
        lines = [
            "PROVINSI DKI JAKARTA",
            "NIK: 3171 0123 4567 8901",
            "Nama: SITI AMINAH",
            "Tempat/Tgl Lahir: JAKARTA, 01-01-1990",
            "Jenis Kelamin: Perempuan",
            "Alamat: JL. MELATI 3",
            "RT/RW: 004/005",
            "Kel/Desa: MENTENG",
            "Kecamatan: MENTENG",
            "Agama: ISLAM",
            "Berlaku Hingga: SEUMUR HIDUP",
        ]
        data = IdCardDataExtractor().extract(lines)
        assert data.nik == "3171012345678901"
        assert data.nama == "SITI AMINAH"
        assert data.jenis_kelamin == "PEREMPUAN"
        assert data.alamat == "JL. MELATI 3 RT/RW: 004/005 Kel/Desa: MENTENG Kecamatan: MENTENG"
        assert data.berlaku_hingga == "SEUMUR HIDUP"

    def test_unlabelled_nik(self):
        data = IdCardDataExtractor().extract(["3201234567890001", "random text"])
        assert data.nik == "3201234567890001"
        assert data.nama is None

    def test_nothing_found(self):
        data = IdCardDataExtractor().extract(["blurry"])
        assert data.model_dump() == {
            "nik": None,
            "nama": None,
            "tempat_tgl_lahir": None,
            "jenis_kelamin": None,
            "alamat": None,
            "berlaku_hingga": None,
        }
