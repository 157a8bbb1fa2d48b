"""Dynadot registrar provider implementation."""

import json
import logging
from typing import Any
from urllib.parse import unquote

import httpx

from dynadot_updater.errors import FetchError, PushError
from dynadot_updater.log import redact_params
from dynadot_updater.models import DnsRecord, RecordSet
from dynadot_updater.providers.base import RegistrarProvider

# Envelopes Dynadot has been seen to wrap NameServerSettings in, tried in order.
NAME_SERVER_SETTINGS_PATHS: tuple[tuple[str, ...], ...] = (
    ("GetDnsResponse", "GetDns", "NameServerSettings"),
    ("Response", "GetDns", "NameServerSettings"),
    ("GetDns", "NameServerSettings"),
)


def extract_name_server_settings(data: Any) -> dict[str, Any]:
    """Return the first NameServerSettings object found, or an empty dict."""
    for path in NAME_SERVER_SETTINGS_PATHS:
        node = data
        for key in path:
            if not isinstance(node, dict):
                node = None
                break
            node = node.get(key)
        if isinstance(node, dict):
            return node
    return {}


def _unique_entries(entries: Any, field: str) -> list[dict[str, Any]]:
    """Drop structurally identical entries, keeping first occurrences."""
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise FetchError(f"Malformed response: {field} is not a list")

    seen: set[str] = set()
    unique = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise FetchError(f"Malformed response: {field} entry is not an object")
        key = json.dumps(entry, sort_keys=True)
        if key not in seen:
            seen.add(key)
            unique.append(entry)
    return unique


def _to_record(entry: dict[str, Any], host_key: str | None = None) -> DnsRecord:
    try:
        return DnsRecord(
            host=str(entry[host_key]) if host_key else "",
            record_type=str(entry["RecordType"]),
            value=str(entry["Value"]),
        )
    except KeyError as e:
        raise FetchError(f"Malformed response: record is missing {e}") from e


def parse_records(data: Any) -> RecordSet:
    """Turn a get_dns response body into a RecordSet."""
    if not isinstance(data, dict):
        raise FetchError("Malformed response: expected a JSON object")

    settings = extract_name_server_settings(data)
    return RecordSet(
        apex=[_to_record(e) for e in _unique_entries(settings.get("MainDomains"), "MainDomains")],
        subdomains=[
            _to_record(e, "Subhost")
            for e in _unique_entries(settings.get("SubDomains"), "SubDomains")
        ],
    )


def build_set_params(api_key: str, domain: str, records: RecordSet) -> list[tuple[str, str]]:
    """Build the positional query parameters of a set_dns2 request."""
    params = [("key", api_key), ("command", "set_dns2"), ("domain", domain)]

    for index, record in enumerate(records.apex):
        params.append((f"main_record_type{index}", record.record_type.lower()))
        params.append((f"main_record{index}", record.value))

    for index, record in enumerate(records.subdomains):
        params.append((f"subdomain{index}", record.host))
        params.append((f"sub_record_type{index}", record.record_type.lower()))
        params.append((f"sub_record{index}", record.value))

    return params


class DynadotProvider(RegistrarProvider):
    """Registrar provider for Dynadot's api3 interface."""

    BASE_URL = "https://api.dynadot.com"
    ENDPOINT = "/api3.json"

    def __init__(
        self,
        api_key: str,
        timeout: float = 30.0,
        log_api_url: bool = False,
        logger: logging.Logger | logging.LoggerAdapter | None = None,
    ):
        """Initialize Dynadot provider.

        Args:
            api_key: Dynadot API key, sent as the ``key`` query parameter
            timeout: Seconds to wait for each response
            log_api_url: Log outbound URLs, with the key redacted
            logger: Logger to report requests on
        """
        self.api_key = api_key
        self.log_api_url = log_api_url
        self.logger = logger or logging.getLogger(__name__)
        self.client = httpx.Client(
            base_url=self.BASE_URL,
            headers={"Accept": "application/json"},
            timeout=timeout,
        )

    def _log_url(self, action: str, params: list[tuple[str, str]]) -> None:
        if self.log_api_url:
            # Mask before encoding; the encoded key would not match the raw one.
            url = httpx.URL(f"{self.BASE_URL}{self.ENDPOINT}", params=redact_params(params))
            self.logger.info(f"{action}: {unquote(str(url))}")

    def fetch_records(self, domain: str) -> RecordSet:
        """Fetch the records currently published for a domain."""
        params = [("key", self.api_key), ("command", "get_dns"), ("domain", domain)]
        self._log_url("Fetching records from", params)

        try:
            response = self.client.get(self.ENDPOINT, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(
                f"Failed to fetch records. Status: {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch records: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError("Malformed response: body is not JSON") from e

        return parse_records(data)

    def push_records(self, domain: str, records: RecordSet) -> str:
        """Replace every record of a domain with ``records``."""
        params = build_set_params(self.api_key, domain, records)
        self._log_url("Making request to", params)

        try:
            response = self.client.get(self.ENDPOINT, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise PushError(f"HTTP error! Status: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise PushError(f"Failed to push records: {e}") from e

        return response.text
