"""SourceRecord: one transcript-processing document from the search index.

No field is guaranteed present. Every attribute is optional so that the
normalizer has to decide a default for each one explicitly.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, field_validator

Metric = Union[int, float, str]


class RequestInfo(BaseModel):
    """Client request metadata nested under ``request``."""

    agent: Optional[str] = None

    model_config = {"extra": "ignore", "str_strip_whitespace": True}

    @field_validator("agent", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        return _to_text(value)


class SourceRecord(BaseModel):
    """Transcript document as stored in the search index."""

    # --- Identity / file metadata ---
    original_filename: Optional[str] = None
    institution_name: Optional[str] = None
    request: Optional[RequestInfo] = None

    # --- People ---
    uploaded_by: Optional[str] = None
    final_reviewer: Optional[str] = None
    processed_by: Optional[str] = None

    # --- Timestamps (ISO-8601, unparsed) ---
    uploaded_date: Optional[str] = None
    processed_on: Optional[str] = None

    # --- Status and metrics ---
    status: Optional[str] = None
    pages: Optional[Metric] = None
    confidence_score: Optional[Metric] = None
    reviewer_handle_time: Optional[Metric] = None
    validator_handle_time: Optional[Metric] = None

    model_config = {"extra": "ignore", "str_strip_whitespace": True}

    @field_validator(
        "original_filename", "institution_name", "uploaded_by", "final_reviewer",
        "processed_by", "uploaded_date", "processed_on", "status",
        mode="before",
    )
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        return _to_text(value)

    @field_validator(
        "pages", "confidence_score", "reviewer_handle_time", "validator_handle_time",
        mode="before",
    )
    @classmethod
    def _scalar_metric(cls, value: Any) -> Any:
        if isinstance(value, bool):
            return str(value)
        if isinstance(value, (dict, list)):
            return None
        return value

    @field_validator("request", mode="before")
    @classmethod
    def _request_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None

    @classmethod
    def from_document(cls, doc: dict[str, Any] | None) -> SourceRecord:
        """Build from a raw ``_source`` mapping; non-mappings yield an empty record."""
        return cls.model_validate(doc if isinstance(doc, dict) else {})

    @property
    def agent(self) -> Optional[str]:
        return self.request.agent if self.request else None


def _to_text(value: Any) -> Any:
    """Coerce scalars to str; drop containers, keep None."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return None
    return str(value)
