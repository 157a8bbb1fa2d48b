"""Subdomain declarations from the numbered SUBDOMAIN<n> keys."""

import logging
from collections.abc import Mapping

from dynadot_updater.models import DnsRecord

DEFAULT_RECORD_TYPE = "A"


def load_declared_subdomains(
    subdomain_env: Mapping[str, str],
    current_ip: str,
    default_subdomain: str = "www",
    logger: logging.Logger | logging.LoggerAdapter | None = None,
) -> list[DnsRecord]:
    """Build the declared subdomain records.

    Indices are read from 0 upwards and scanning stops at the first index
    without a ``SUBDOMAIN<n>`` host, so declarations must be contiguous. Index
    0 is the exception: when its host is unset it falls back to
    ``default_subdomain``. Type defaults to A and value to ``current_ip``.

    Declaring the same host and type twice keeps the first position with the
    last value.
    """
    logger = logger or logging.getLogger(__name__)
    declared: dict[tuple[str, str], DnsRecord] = {}
    index = 0

    while True:
        host = subdomain_env.get(f"SUBDOMAIN{index}", "").strip()
        if not host:
            if index != 0:
                break
            host = default_subdomain
            logger.info(f"SUBDOMAIN0 defaulted to: {host}")

        record = DnsRecord(
            host=host,
            record_type=(
                subdomain_env.get(f"SUBDOMAIN{index}_TYPE", "").strip()
                or DEFAULT_RECORD_TYPE
            ).upper(),
            value=subdomain_env.get(f"SUBDOMAIN{index}_VALUE", "").strip() or current_ip,
        )
        if record.slot in declared:
            logger.warning(
                f"SUBDOMAIN{index} redeclares {record.host} {record.record_type}, "
                "using the later value"
            )
        declared[record.slot] = record
        logger.info(f"Loaded SUBDOMAIN{index}: {record}")
        index += 1

    return list(declared.values())
