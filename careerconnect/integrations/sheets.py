"""Google Sheets v4 client

The sponsor import only reads ``values``, for which an API key is enough as
long as the sheet is shared as "anyone with the link". The Itikaf registry
also appends, updates and deletes rows; those calls need an OAuth access
token and send it as a bearer header instead of the key.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from careerconnect.core.errors import SheetsApiError
from careerconnect.core.grouping import group_label
from careerconnect.core.monitoring import log_integration_call

DEFAULT_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"

_WHITESPACE = re.compile(r"\s+")


def normalize_header(header: str) -> str:
    """``" Nama Pengqurban "`` -> ``"nama_pengqurban"``."""
    return _WHITESPACE.sub("_", str(header).strip().lower())


def rows_to_records(values: List[List[Any]], header_row: int = 1) -> List[Dict[str, Any]]:
    """Turn a header row plus data rows into dicts keyed by normalized header.

    ``header_row`` is the 1-based row holding the headers; rows above it are
    ignored. Short rows are padded with empty strings, blank rows are skipped.
    """
    if len(values) < header_row:
        return []
    headers = [normalize_header(h) for h in values[header_row - 1]]
    records: List[Dict[str, Any]] = []
    for row in values[header_row:]:
        if not any(str(cell).strip() for cell in row):
            continue
        padded = list(row) + [""] * (len(headers) - len(row))
        records.append(dict(zip(headers, padded)))
    return records


def a1_range(sheet_name: str, cells: Optional[str] = None) -> str:
    if cells is None:
        return sheet_name
    return f"'{sheet_name}'!{cells}"


class GoogleSheetsClient:
    def __init__(
        self,
        api_key: str,
        *,
        access_token: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self._api_key = api_key
        self._access_token = access_token
        self._base_url = base_url.rstrip("/")
        self._http = client or httpx.AsyncClient(timeout=15.0)
        self._logger = logging.getLogger(__name__)

    async def _request(
        self,
        method: str,
        url: str,
        operation: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        write: bool = False,
    ) -> httpx.Response:
        params = dict(params or {})
        headers: Dict[str, str] = {}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        elif write:
            raise SheetsApiError("Google Sheets writes need an access token")
        else:
            params["key"] = self._api_key

        self._logger.debug("GoogleSheetsClient: %s %s", method, url)
        started = time.perf_counter()
        try:
            response = await self._http.request(method, url, params=params, json=json, headers=headers)
        except httpx.HTTPError as exc:
            log_integration_call("sheets", operation, None, (time.perf_counter() - started) * 1000)
            raise SheetsApiError(f"Google Sheets request failed: {exc}") from exc

        log_integration_call("sheets", operation, response.status_code, (time.perf_counter() - started) * 1000)
        return response

    @staticmethod
    def _raise_for_status(response: httpx.Response, not_found: str) -> None:
        if response.status_code == 404:
            raise SheetsApiError(not_found, status_code=404)
        if response.status_code >= 400:
            raise SheetsApiError(
                f"Google Sheets API error: {response.status_code}",
                status_code=response.status_code,
                details=response.text,
            )

    def _values_url(self, sheet_id: str, range_: str) -> str:
        return f"{self._base_url}/{sheet_id}/values/{quote(range_, safe='')}"

    async def get_values(self, sheet_id: str, sheet_name: str = "Sheet1") -> List[List[Any]]:
        """Return every populated row of ``sheet_name`` including the header row."""
        response = await self._request("GET", self._values_url(sheet_id, sheet_name), "values")
        self._raise_for_status(response, f'Sheet "{sheet_name}" not found')
        return response.json().get("values", [])

    async def append_row(self, sheet_id: str, sheet_name: str, row: List[Any]) -> Dict[str, Any]:
        """Append ``row`` below the last populated row and return the ``updates`` block."""
        response = await self._request(
            "POST",
            self._values_url(sheet_id, sheet_name) + ":append",
            "append",
            params={"valueInputOption": "USER_ENTERED", "insertDataOption": "INSERT_ROWS"},
            json={"values": [row]},
            write=True,
        )
        self._raise_for_status(response, f'Sheet "{sheet_name}" not found')
        return response.json().get("updates", {})

    async def update_cell(self, sheet_id: str, sheet_name: str, row_number: int, column: int, value: Any) -> None:
        """Write one cell; ``row_number`` is 1-based, ``column`` is 0-based."""
        cell = a1_range(sheet_name, f"{group_label(column)}{row_number}")
        response = await self._request(
            "PUT",
            self._values_url(sheet_id, cell),
            "update",
            params={"valueInputOption": "USER_ENTERED"},
            json={"values": [[value]]},
            write=True,
        )
        self._raise_for_status(response, f'Sheet "{sheet_name}" not found')

    async def delete_row(self, sheet_id: str, sheet_name: str, row_number: int) -> None:
        """Remove the 1-based ``row_number`` and shift the rows below it up."""
        meta = await self._request(
            "GET", f"{self._base_url}/{sheet_id}", "metadata", params={"fields": "sheets.properties"}, write=True
        )
        self._raise_for_status(meta, f"Spreadsheet {sheet_id} not found")
        grid_id = None
        for sheet in meta.json().get("sheets", []):
            properties = sheet.get("properties", {})
            if properties.get("title") == sheet_name:
                grid_id = properties.get("sheetId")
                break
        if grid_id is None:
            raise SheetsApiError(f'Sheet "{sheet_name}" not found', status_code=404)

        body = {
            "requests": [
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": grid_id,
                            "dimension": "ROWS",
                            "startIndex": row_number - 1,
                            "endIndex": row_number,
                        }
                    }
                }
            ]
        }
        response = await self._request(
            "POST", f"{self._base_url}/{sheet_id}:batchUpdate", "batch_update", json=body, write=True
        )
        self._raise_for_status(response, f"Spreadsheet {sheet_id} not found")

    async def aclose(self) -> None:
        await self._http.aclose()
