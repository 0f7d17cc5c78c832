"""Identity card OCR

``LlamaOcrClient`` talks to the Llama-OCR HTTP API: ``extract_structured``
asks the ``/structured`` endpoint for labelled fields, ``extract_text`` asks
for raw text lines. ``IdCardDataExtractor`` recovers the same fields from raw
text when the structured call is unavailable.
"""

from __future__ import annotations

import base64
import logging
import re
import time
from typing import Any, Dict, List, Optional

import httpx

from careerconnect.core.errors import OcrApiError
from careerconnect.core.monitoring import log_integration_call
from careerconnect.core.models.io.integrations import IdCardData

DEFAULT_ENDPOINT = "https://api.llama-ocr.ai/v1/extract"

# Structured field aliases returned by the OCR service
_STRUCTURED_ALIASES: Dict[str, tuple] = {
    "nik": ("nik", "id_number", "document_number"),
    "nama": ("nama", "full_name", "name"),
    "tempat_tgl_lahir": ("tempat_tgl_lahir", "place_date_of_birth", "date_of_birth", "dob"),
    "jenis_kelamin": ("jenis_kelamin", "gender", "sex"),
    "alamat": ("alamat", "address"),
    "berlaku_hingga": ("berlaku_hingga", "expiry_date", "expiration_date"),
}


class LlamaOcrClient:
    """Async client for the Llama-OCR API.

    Args:
        api_key: Bearer key for the service.
        endpoint: Text extraction endpoint; ``/structured`` is appended for field extraction.
        client: Optional shared ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = DEFAULT_ENDPOINT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._endpoint = endpoint.rstrip("/")
        self._http = client or httpx.AsyncClient(timeout=30.0)
        self._logger = logging.getLogger(__name__)

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Authorization": f"Bearer {self._api_key}"}

    async def _post(self, url: str, operation: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        started = time.perf_counter()
        try:
            response = await self._http.post(url, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            log_integration_call("ocr", operation, None, (time.perf_counter() - started) * 1000)
            raise OcrApiError(f"OCR request failed: {exc}") from exc

        log_integration_call("ocr", operation, response.status_code, (time.perf_counter() - started) * 1000)
        if response.status_code >= 400:
            try:
                reason = response.json().get("error") or response.reason_phrase
            except ValueError:
                reason = response.reason_phrase
            raise OcrApiError(f"Llama-OCR API error: {reason}", status_code=response.status_code)
        return response.json()

    async def extract_text(self, image: bytes, content_type: str = "image/jpeg") -> List[str]:
        """Return the detected text split into lines (empty when nothing was read)."""
        payload = {
            "image": base64.b64encode(image).decode("ascii"),
            "content_type": content_type,
            "options": {"detail": "high", "language": "auto", "document_type": "id_card"},
        }
        data = await self._post(self._endpoint, "extract_text", payload)
        text = data.get("text") or ""
        return [line for line in text.split("\n") if line.strip()]

    async def extract_structured(self, image: bytes, content_type: str = "image/jpeg") -> IdCardData:
        payload = {
            "image": base64.b64encode(image).decode("ascii"),
            "content_type": content_type,
            "options": {"detail": "high", "document_type": "id_card", "extract_fields": True},
        }
        data = await self._post(f"{self._endpoint}/structured", "extract_structured", payload)
        fields = data.get("fields") or {}
        result: Dict[str, Optional[str]] = {}
        for name, aliases in _STRUCTURED_ALIASES.items():
            result[name] = next((fields[a] for a in aliases if fields.get(a)), None)
        if not any(result.values()):
            raise OcrApiError("OCR service returned no fields")
        return IdCardData(**result)

    async def aclose(self) -> None:
        await self._http.aclose()


class IdCardDataExtractor:
    """Pull KTP fields out of OCR text lines.

    Each field is found by its printed label (``NIK``, ``Nama``, ...); the
    NIK additionally falls back to the first 16-digit run in the text.
    """

    _LABELS = {
        "nama": re.compile(r"^\s*nama\s*[:\-]?\s*(.+)$", re.IGNORECASE),
        "tempat_tgl_lahir": re.compile(r"^\s*tempat\s*/?\s*tgl\.?\s*lahir\s*[:\-]?\s*(.+)$", re.IGNORECASE),
        "jenis_kelamin": re.compile(r"^\s*jenis\s*kelamin\s*[:\-]?\s*(.+)$", re.IGNORECASE),
        "alamat": re.compile(r"^\s*alamat\s*[:\-]?\s*(.+)$", re.IGNORECASE),
        "berlaku_hingga": re.compile(r"^\s*berlaku\s*hingga\s*[:\-]?\s*(.+)$", re.IGNORECASE),
    }
    _NIK_LABEL = re.compile(r"\bnik\b\s*[:\-]?\s*([\d\s]{16,})", re.IGNORECASE)
    _NIK_DIGITS = re.compile(r"(?<!\d)\d{16}(?!\d)")
    _GENDER = re.compile(r"(LAKI-LAKI|PEREMPUAN)", re.IGNORECASE)
    _ADDRESS_CONTINUATION = re.compile(r"^\s*(rt\s*/?\s*rw|kel\s*/?\s*desa|kecamatan)\b", re.IGNORECASE)

    def extract(self, lines: List[str]) -> IdCardData:
        data: Dict[str, Optional[str]] = {"nik": self._nik(lines)}
        for index, line in enumerate(lines):
            for name, pattern in self._LABELS.items():
                if data.get(name):
                    continue
                match = pattern.match(line)
                if match:
                    data[name] = match.group(1).strip()
                    if name == "alamat":
                        data[name] = self._address(lines, index, data[name])
        if data.get("jenis_kelamin"):
            gender = self._GENDER.search(data["jenis_kelamin"])
            data["jenis_kelamin"] = gender.group(1).upper() if gender else data["jenis_kelamin"]
        return IdCardData(**data)

    def _nik(self, lines: List[str]) -> Optional[str]:
        text = " ".join(lines)
        labelled = self._NIK_LABEL.search(text)
        if labelled:
            digits = re.sub(r"\D", "", labelled.group(1))
            if len(digits) >= 16:
                return digits[:16]
        match = self._NIK_DIGITS.search(text)
        return match.group(0) if match else None

    def _address(self, lines: List[str], index: int, first: str) -> str:
        # RT/RW, Kel/Desa and Kecamatan lines continue the address
        parts = [first]
        for line in lines[index + 1 :]:
            if not self._ADDRESS_CONTINUATION.match(line):
                break
            parts.append(line.strip())
        return " ".join(parts)
