"""Pluggable collaborator backends behind Protocol interfaces."""

from __future__ import annotations

from shiftsheet.core.config import AppSettings
from shiftsheet.core.exceptions import ConfigurationError
from shiftsheet.persistence.opensearch_backend import OpenSearchQueryClient
from shiftsheet.persistence.sheets_backend import GoogleSheetsStore


def create_persistence(settings: AppSettings | None = None):
    """Create wired-up production collaborators from application settings.

    Returns:
        Tuple of (query_client, sheet_store).
    """
    if settings is None:
        settings = AppSettings()

    missing = [
        name for name, value in (
            ("SHIFTSHEET_SEARCH_ENDPOINT", settings.search.endpoint),
            ("SHIFTSHEET_SHEETS_SPREADSHEET_ID", settings.sheets.spreadsheet_id),
            ("SHIFTSHEET_SHEETS_CREDENTIALS_FILE", settings.sheets.credentials_file),
        ) if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")

    query_client = OpenSearchQueryClient(
        endpoint=settings.search.endpoint,
        region=settings.search.region,
        service=settings.search.service,
        index_template=settings.search.index_template,
        timestamp_field=settings.search.timestamp_field,
        agent_field=settings.search.agent_field,
        max_results=settings.search.max_results,
        timeout=settings.search.timeout,
    )

    sheet_store = GoogleSheetsStore(
        spreadsheet_id=settings.sheets.spreadsheet_id,
        credentials_file=settings.sheets.credentials_file,
    )

    return query_client, sheet_store
