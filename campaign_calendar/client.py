"""Data-access client that feeds campaign records into the calendar."""

from __future__ import annotations

import datetime as dt
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Optional

import requests

from .config import DEFAULT_API_URL
from .records import CalendarRecord, resolve_effective_date, to_date_key

logger = logging.getLogger(__name__)


class CalendarClientError(Exception):
    """Base exception for campaign API related errors."""


class AuthenticationError(CalendarClientError):
    """Raised when the campaign API rejects the supplied token."""


class NetworkError(CalendarClientError):
    """Raised when the remote service cannot be reached."""


class PayloadError(CalendarClientError):
    """Raised when a response or file does not have the expected shape."""


@dataclass
class Company:
    """A company account that campaigns can be filtered by."""

    id: str
    name: str


class CampaignClient:
    """HTTP client for the campaign management API."""

    CAMPAIGNS_PATH = "/campaigns"
    COMPANIES_PATH = "/company-accounts"

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        token: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.setdefault("Accept", "application/json")
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def fetch_campaigns(self) -> List[CalendarRecord]:
        """Fetch every campaign and convert it into a calendar record.

        Raises:
            AuthenticationError: If the API rejects the request.
            NetworkError: If the request cannot be completed.
            PayloadError: If the response is not the expected envelope.
        """

        items = self._get_data(self.CAMPAIGNS_PATH)
        return list(records_from_campaigns(items))

    def fetch_companies(self) -> List[Company]:
        items = self._get_data(self.COMPANIES_PATH)
        return list(companies_from_payload(items))

    def _get_data(self, path: str) -> List[Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise NetworkError(f"Failed to reach {url}.") from exc

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Access to {url} was denied (HTTP {response.status_code})."
            )
        try:
            response.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(
                f"Request to {url} failed with HTTP {response.status_code}."
            ) from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise PayloadError(f"Response from {url} is not valid JSON.") from exc

        return _unwrap_data(body, source=url)


def _unwrap_data(body: object, source: str) -> List[Any]:
    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        data = body.get("data")
        if data is None:
            return []
        if isinstance(data, list):
            return data
    raise PayloadError(f"Expected a list of items from {source}.")


def _entity_id(raw: dict) -> Optional[str]:
    company = raw.get("companyAccount")
    if isinstance(company, dict):
        value = company.get("_id")
    else:
        value = company
    return str(value) if value not in (None, "") else None


def records_from_campaigns(items: Iterable[object]) -> Iterable[CalendarRecord]:
    """Convert raw campaign dictionaries, skipping ones that cannot be placed."""

    for raw in items:
        if not isinstance(raw, dict):
            logger.warning("Skipping campaign entry that is not an object: %r", raw)
            continue

        record_id = raw.get("_id") or raw.get("id")
        if not record_id:
            logger.warning("Skipping campaign without an id: %r", raw.get("name"))
            continue

        effective_date = resolve_effective_date(raw)
        if effective_date is None:
            logger.warning("Skipping campaign %s without a scheduled or created date", record_id)
            continue
        if to_date_key(effective_date, dt.timezone.utc) is None:
            logger.warning(
                "Skipping campaign %s with unparseable date %r", record_id, effective_date
            )
            continue

        yield CalendarRecord(
            id=str(record_id),
            effective_date=effective_date,
            payload=raw,
            entity_id=_entity_id(raw),
        )


def companies_from_payload(items: Iterable[object]) -> Iterable[Company]:
    for raw in items:
        if not isinstance(raw, dict) or not raw.get("_id"):
            logger.warning("Skipping company entry without an id: %r", raw)
            continue
        name = raw.get("companyName") or raw.get("name") or str(raw["_id"])
        yield Company(id=str(raw["_id"]), name=str(name))


def load_records_file(path: str | Path) -> List[CalendarRecord]:
    """Read campaigns from a JSON export instead of the API."""

    file_path = Path(path)
    try:
        with file_path.open("r", encoding="utf-8") as handle:
            body = json.load(handle)
    except OSError as exc:
        raise CalendarClientError(f"Failed to read {file_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise PayloadError(f"{file_path} is not valid JSON: {exc}") from exc

    return list(records_from_campaigns(_unwrap_data(body, source=str(file_path))))


def load_companies_file(path: str | Path) -> List[Company]:
    """Read the distinct companies referenced by a JSON campaign export."""

    seen: dict[str, Company] = {}
    for record in load_records_file(path):
        company = record.payload.get("companyAccount")
        if record.entity_id is None or record.entity_id in seen:
            continue
        name = company.get("companyName") if isinstance(company, dict) else None
        seen[record.entity_id] = Company(id=record.entity_id, name=str(name or record.entity_id))
    return list(seen.values())
