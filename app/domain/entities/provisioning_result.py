"""Domain entity describing the outcome of provisioning one database."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TenantProvisioningResult:
    """What provisioning did to a single database, or why it failed."""

    database: str
    succeeded: bool
    table_created: bool = False
    added_columns: tuple[str, ...] = field(default_factory=tuple)
    seeded_rows: int = 0
    error: str | None = None


__all__ = ["TenantProvisioningResult"]
