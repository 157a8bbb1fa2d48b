"""Shared test fixtures for Dynadot updater tests."""

import os
from unittest.mock import MagicMock, patch

import httpx
import pytest
from typer.testing import CliRunner

from dynadot_updater.config import UpdaterConfig
from dynadot_updater.models import DnsRecord, RecordSet


# ============================================================================
# CLI Fixtures
# ============================================================================


@pytest.fixture
def runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


# ============================================================================
# Environment Fixtures
# ============================================================================

MANAGED_ENV_KEYS = (
    "DYNADOT_API_KEY",
    "DYNADOT_UPDT_DOMAINS",
    "DYNADOT_DOMAIN",
    "DEFAULT_SUBDOMAIN",
    "MANUAL_IP",
    "MERGE_ENTRIES",
    "LOG_VERBOSE",
    "LOG_API_URL",
    "REQUEST_TIMEOUT",
    "IP_LOOKUP_URL",
)


@pytest.fixture
def clean_env(tmp_path, monkeypatch):
    """Strip updater variables from the environment and leave no .env around."""
    for key in MANAGED_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    for key in list(os.environ):
        if key.startswith("SUBDOMAIN"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


@pytest.fixture
def configured_env(clean_env):
    """Environment with the required settings present."""
    clean_env.setenv("DYNADOT_API_KEY", "secret-key")
    clean_env.setenv("DYNADOT_UPDT_DOMAINS", "example.com")
    return clean_env


# ============================================================================
# Mock Fixtures - HTTP/API
# ============================================================================


@pytest.fixture
def mock_httpx_get():
    """Mock httpx.get for IP detection."""
    with patch("httpx.get") as mock:
        mock.return_value = httpx.Response(200, text="203.0.113.7\n")
        yield mock


@pytest.fixture
def mock_httpx_client():
    """Mock httpx.Client for registrar calls."""
    with patch("httpx.Client") as mock_client_class:
        mock_client = MagicMock()
        mock_client_class.return_value = mock_client
        yield mock_client


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def config() -> UpdaterConfig:
    """Provide a configuration with a manual IP so no lookup happens."""
    return UpdaterConfig(
        api_key="secret-key",
        domain="example.com",
        manual_ip="9.9.9.9",
        subdomain_env={"SUBDOMAIN0": "www"},
    )


@pytest.fixture
def sample_record_set() -> RecordSet:
    """Provide records as Dynadot might currently hold them."""
    return RecordSet(
        apex=[DnsRecord(record_type="A", value="1.1.1.1")],
        subdomains=[
            DnsRecord(host="www", record_type="A", value="1.1.1.1"),
            DnsRecord(host="mail", record_type="MX", value="mx.example.com"),
        ],
    )


@pytest.fixture
def sample_get_dns_response() -> dict:
    """Provide a get_dns response body in the GetDnsResponse envelope."""
    return {
        "GetDnsResponse": {
            "ResponseCode": 0,
            "Status": "success",
            "GetDns": {
                "NameServerSettings": {
                    "Type": "Dynadot DNS",
                    "MainDomains": [
                        {"RecordType": "A", "Value": "1.1.1.1"},
                        {"RecordType": "TXT", "Value": "v=spf1 -all"},
                    ],
                    "SubDomains": [
                        {"Subhost": "www", "RecordType": "A", "Value": "1.1.1.1"},
                        {"Subhost": "mail", "RecordType": "MX", "Value": "mx.example.com"},
                        {"Subhost": "www", "RecordType": "A", "Value": "1.1.1.1"},
                    ],
                }
            },
        }
    }
