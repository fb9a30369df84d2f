"""Google Sheets backend implementing ISheetStore over the v4 values API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from shiftsheet.core.exceptions import StorageError
from shiftsheet.core.types import Row

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


class GoogleSheetsStore:
    """Production ISheetStore backed by a single Google spreadsheet.

    Writes use USER_ENTERED so a leading apostrophe keeps a cell as text.
    """

    def __init__(self, spreadsheet_id: str, credentials_file: str = "",
                 service: Any = None) -> None:
        self._spreadsheet_id = spreadsheet_id
        if service is None:
            try:
                credentials = service_account.Credentials.from_service_account_file(
                    credentials_file, scopes=SCOPES,
                )
            except (OSError, ValueError) as exc:
                raise StorageError(
                    "load credentials", f"cannot read service account file {credentials_file!r}: {exc}"
                ) from exc
            service = build("sheets", "v4", credentials=credentials, cache_discovery=False)
        self._values = service.spreadsheets().values()

    def _execute(self, operation: str, range_spec: str, request: Any) -> dict[str, Any]:
        try:
            return request.execute() or {}
        except HttpError as exc:
            raise StorageError(operation, f"range={range_spec!r}: {exc}") from exc
        except (GoogleAuthError, OSError) as exc:
            raise StorageError(operation, f"range={range_spec!r}: {exc}") from exc

    def read_range(self, range_spec: str) -> list[Row]:
        resp = self._execute("read range", range_spec, self._values.get(
            spreadsheetId=self._spreadsheet_id, range=range_spec, majorDimension="ROWS",
        ))
        return [[str(cell) for cell in row] for row in resp.get("values", [])]

    def append_rows(self, range_spec: str, rows: Sequence[Row]) -> None:
        resp = self._execute("append rows", range_spec, self._values.append(
            spreadsheetId=self._spreadsheet_id,
            range=range_spec,
            valueInputOption="USER_ENTERED",
            insertDataOption="INSERT_ROWS",
            body={"values": [list(r) for r in rows]},
        ))
        logger.debug("Appended %d rows at %s", len(rows), resp.get("updates", {}).get("updatedRange", range_spec))

    def clear_range(self, range_spec: str) -> None:
        self._execute("clear range", range_spec, self._values.clear(
            spreadsheetId=self._spreadsheet_id, range=range_spec, body={},
        ))

    def overwrite_range(self, range_spec: str, rows: Sequence[Row]) -> None:
        self._execute("overwrite range", range_spec, self._values.update(
            spreadsheetId=self._spreadsheet_id,
            range=range_spec,
            valueInputOption="USER_ENTERED",
            body={"values": [list(r) for r in rows]},
        ))
