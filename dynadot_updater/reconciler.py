"""Record reconciliation.

Computes the complete record set to publish from the records the registrar
currently holds and the subdomains declared in configuration. Dynadot's
``set_dns2`` replaces everything it remembers for a domain, so the result is
always the full set, never a delta.

Nothing in this module performs I/O.
"""

from pydantic import BaseModel, Field

from dynadot_updater.models import (
    DnsRecord,
    RecordChange,
    RecordDiff,
    RecordSet,
    ReconcilePolicy,
)


class ReconcileResult(BaseModel):
    """Outcome of reconciling one domain."""

    records: RecordSet
    diff: RecordDiff
    policy: ReconcilePolicy
    # Existing subdomain records carried over unchanged (MERGE only).
    preserved: list[DnsRecord] = Field(default_factory=list)


def normalize_apex(apex: list[DnsRecord], ip: str) -> list[DnsRecord]:
    """Reduce the apex to a single A record pointing at ``ip``.

    The first existing A record keeps its slot, rewritten as (A, ip); every
    other apex record is dropped.
    """
    for record in apex:
        if record.record_type.upper() == "A":
            return [record.model_copy(update={"record_type": "A", "value": ip})]
    return [DnsRecord(record_type="A", value=ip)]


def diff_subdomains(current: list[DnsRecord], declared: list[DnsRecord]) -> RecordDiff:
    """Compare published and declared subdomain records slot by slot."""
    current_by_slot = {record.slot: record for record in current}
    declared_by_slot = {record.slot: record for record in declared}

    diff = RecordDiff()
    for slot, record in declared_by_slot.items():
        existing = current_by_slot.get(slot)
        if existing is None:
            diff.added.append(record)
        elif existing.value != record.value:
            diff.changed.append(RecordChange(before=existing, after=record))

    for slot, record in current_by_slot.items():
        if slot not in declared_by_slot:
            diff.removed.append(record)

    return diff


def merge_subdomains(
    current: list[DnsRecord], declared: list[DnsRecord]
) -> tuple[list[DnsRecord], list[DnsRecord]]:
    """Overlay declared records on the published ones.

    Returns the merged list and the existing records that were preserved.
    Declared records come first, then non-address records, then address
    records whose slot is not declared.
    """
    declared_slots = {record.slot for record in declared}

    non_address = [record for record in current if not record.is_address]
    unmanaged_address = [
        record
        for record in current
        if record.is_address and record.slot not in declared_slots
    ]

    preserved = non_address + unmanaged_address
    return list(declared) + preserved, preserved


def reconcile(
    current: RecordSet,
    declared: list[DnsRecord],
    ip: str,
    policy: ReconcilePolicy = ReconcilePolicy.REBUILD,
) -> ReconcileResult:
    """Compute the record set to publish for ``policy``."""
    apex = normalize_apex(current.apex, ip)
    diff = diff_subdomains(current.subdomains, declared)

    if policy is ReconcilePolicy.MERGE:
        subdomains, preserved = merge_subdomains(current.subdomains, declared)
    else:
        subdomains, preserved = list(declared), []

    return ReconcileResult(
        records=RecordSet(apex=apex, subdomains=subdomains),
        diff=diff,
        policy=policy,
        preserved=preserved,
    )
