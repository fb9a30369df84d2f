"""OpenSearch backend implementing IQueryClient with AWS SigV4 request signing."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

import boto3
import httpx
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.exceptions import BotoCoreError

from shiftsheet.core.exceptions import QueryError
from shiftsheet.core.types import JsonDict

logger = logging.getLogger(__name__)


def _iso(instant: datetime) -> str:
    utc = instant.astimezone(timezone.utc) if instant.tzinfo else instant.replace(tzinfo=timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class OpenSearchQueryClient:
    """Production IQueryClient against an AWS-managed OpenSearch domain."""

    def __init__(
        self,
        endpoint: str,
        region: str = "us-east-1",
        *,
        service: str = "es",
        index_template: str = "{namespace}_sia_transcript_details",
        timestamp_field: str = "processed_on",
        agent_field: str = "request.agent",
        max_results: int = 1000,
        timeout: float = 30.0,
        session: boto3.Session | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint.rstrip("/")
        self._region = region
        self._service = service
        self._index_template = index_template
        self._timestamp_field = timestamp_field
        self._agent_field = agent_field
        self._max_results = max_results
        self._timeout = timeout
        self._session = session or boto3.Session(region_name=region)
        self._transport = transport

    def index_for(self, namespace: str) -> str:
        return self._index_template.format(namespace=namespace)

    def build_query(
        self,
        from_instant: datetime,
        to_instant: datetime,
        allow_list: Sequence[str] | None = None,
    ) -> JsonDict:
        filters: list[JsonDict] = [
            {"range": {self._timestamp_field: {"gte": _iso(from_instant), "lte": _iso(to_instant)}}},
        ]
        if allow_list:
            filters.append({"terms": {self._agent_field: list(allow_list)}})
        return {"size": self._max_results, "query": {"bool": {"filter": filters}}}

    def _signed_headers(self, url: str, body: bytes) -> dict[str, str]:
        credentials = self._session.get_credentials()
        if credentials is None:
            raise QueryError("sign request", "no AWS credentials available")
        request = AWSRequest(method="POST", url=url, data=body,
                             headers={"Content-Type": "application/json"})
        SigV4Auth(credentials.get_frozen_credentials(), self._service, self._region).add_auth(request)
        return dict(request.headers.items())

    def search(
        self,
        namespace: str,
        from_instant: datetime,
        to_instant: datetime,
        allow_list: Sequence[str] | None = None,
    ) -> list[JsonDict]:
        url = f"{self._endpoint}/{self.index_for(namespace)}/_search"
        body = json.dumps(self.build_query(from_instant, to_instant, allow_list)).encode("utf-8")

        try:
            headers = self._signed_headers(url, body)
        except BotoCoreError as exc:
            raise QueryError("sign request", str(exc)) from exc

        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                resp = client.post(url, content=body, headers=headers)
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise QueryError(
                "search", f"{exc.response.status_code} from {url}: {exc.response.text[:500]}"
            ) from exc
        except httpx.HTTPError as exc:
            raise QueryError("search", f"{url}: {exc}") from exc

        try:
            hits: list[Any] = resp.json()["hits"]["hits"]
        except (ValueError, KeyError, TypeError) as exc:
            raise QueryError("search", f"unexpected response body from {url}: {exc}") from exc

        logger.info("Search %s returned %d hits", self.index_for(namespace), len(hits))
        return [hit.get("_source") or {} for hit in hits if isinstance(hit, dict)]
