"""Record models shared by the registrar client and the reconciler."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

ADDRESS_TYPES = frozenset({"A", "AAAA"})


class ReconcilePolicy(str, Enum):
    """How declared subdomains are combined with the published ones."""

    REBUILD = "rebuild"
    MERGE = "merge"


class DnsRecord(BaseModel):
    """A single DNS record. Apex records have an empty host."""

    model_config = ConfigDict(frozen=True)

    host: str = ""
    record_type: str
    value: str

    @property
    def slot(self) -> tuple[str, str]:
        """Identity of the record across runs: host plus upper-cased type."""
        return (self.host, self.record_type.upper())

    @property
    def is_address(self) -> bool:
        return self.record_type.upper() in ADDRESS_TYPES

    def __str__(self) -> str:
        return f"{self.host or '@'} {self.record_type} {self.value}"


class RecordSet(BaseModel):
    """Apex and subdomain records of one domain, in registrar order."""

    apex: list[DnsRecord] = Field(default_factory=list)
    subdomains: list[DnsRecord] = Field(default_factory=list)


class RecordChange(BaseModel):
    """A slot present on both sides whose value differs."""

    before: DnsRecord
    after: DnsRecord


class RecordDiff(BaseModel):
    """Subdomain changes between the published and the declared records."""

    added: list[DnsRecord] = Field(default_factory=list)
    removed: list[DnsRecord] = Field(default_factory=list)
    changed: list[RecordChange] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.added or self.removed or self.changed)
