"""Run orchestration: resolve, fetch, reconcile, push."""

from pydantic import BaseModel

from dynadot_updater import __version__
from dynadot_updater.config import UpdaterConfig
from dynadot_updater.declarations import load_declared_subdomains
from dynadot_updater.errors import FetchError, UpdaterError
from dynadot_updater.log import RunLogger, get_run_logger
from dynadot_updater.models import RecordDiff, RecordSet, ReconcilePolicy
from dynadot_updater.providers import DynadotProvider, RegistrarProvider
from dynadot_updater.reconciler import ReconcileResult, reconcile
from dynadot_updater.resolver import resolve_ip


class RunResult(BaseModel):
    """Summary of one update run."""

    correlation_id: str
    ip: str
    fetch_failed: bool = False
    reconciled: ReconcileResult
    # Raw registrar response; None when the push was skipped.
    response: str | None = None


def log_diff(diff: RecordDiff, logger: RunLogger) -> None:
    if diff.is_empty:
        logger.info("Diff: no subdomain changes")
        return

    for record in diff.added:
        logger.info(f"Added: {record}")
    for record in diff.removed:
        logger.info(f"Removed: {record}")
    for change in diff.changed:
        logger.info(f"Changed: {change.before} → {change.after.value}")


def run_update(
    config: UpdaterConfig,
    provider: RegistrarProvider | None = None,
    dry_run: bool = False,
    logger: RunLogger | None = None,
) -> RunResult:
    """Perform one synchronization run.

    A failed fetch is logged and treated as an empty record set so the new IP
    still gets published. IP resolution and push failures are logged and
    re-raised.
    """
    logger = logger or get_run_logger()
    correlation_id = logger.extra["correlation_id"]

    logger.info("Starting Dynadot IP Updater")
    logger.info(f"Version: {__version__}")
    logger.info(f"Dynadot API Key: {'***' if config.api_key else 'Not set'}")

    if provider is None:
        provider = DynadotProvider(
            api_key=config.api_key,
            timeout=config.request_timeout,
            log_api_url=config.log_api_url,
            logger=logger,
        )

    try:
        ip = resolve_ip(config.manual_ip, config.ip_lookup_url, config.request_timeout)
        logger.info(f"Current IP: {ip}")
        logger.info(f"Domain: {config.domain}")
        logger.info(f"Manual IP: {config.manual_ip or 'No'}")

        fetch_failed = False
        try:
            current = provider.fetch_records(config.domain)
        except FetchError as e:
            logger.error(f"Error fetching existing records: {e}")
            current = RecordSet()
            fetch_failed = True

        declared = load_declared_subdomains(
            config.subdomain_env, ip, config.default_subdomain, logger=logger
        )
        result = reconcile(current, declared, ip, config.policy)
        log_diff(result.diff, logger)

        if config.policy is ReconcilePolicy.MERGE:
            logger.info("Mode: MERGE (preserving existing non-A records)")
            logger.info(f"Preserved {len(result.preserved)} existing records")
        else:
            logger.info("Mode: REBUILD (overwriting all subdomains)")

        for record in result.records.apex + result.records.subdomains:
            logger.debug(f"Publishing: {record}")

        response = None
        if dry_run:
            logger.info("Dry run: skipping DNS update")
        else:
            response = provider.push_records(config.domain, result.records)
            logger.info(f"DNS update response: {response}")
    except UpdaterError as e:
        logger.error(f"Error: {e}")
        raise

    return RunResult(
        correlation_id=correlation_id,
        ip=ip,
        fetch_failed=fetch_failed,
        reconciled=result,
        response=response,
    )
