"""Run result contracts."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field

from rbxsync.contracts.ledger import Ledger
from rbxsync.contracts.resource import ResourceKind


class ResourceAction(StrEnum):
    """Reported decision for one declared resource.

    ``CREATE`` and ``UPDATE`` are dry-run intents; ``CREATED`` and ``UPDATED``
    mean the remote call succeeded.
    """

    CREATE = "create"
    CREATED = "created"
    UPDATE = "update"
    UPDATED = "updated"
    SKIP = "skip"


class ResourceOutcome(BaseModel):
    kind: ResourceKind | None = None
    name: str
    action: ResourceAction
    remote_id: int | None = None
    changed_fields: list[str] = Field(default_factory=list)


class KindSummary(BaseModel):
    created: int = 0
    updated: int = 0
    skipped: int = 0

    @classmethod
    def from_outcomes(cls, outcomes: list[ResourceOutcome]) -> KindSummary:
        summary = cls()
        for outcome in outcomes:
            if outcome.action in (ResourceAction.CREATE, ResourceAction.CREATED):
                summary.created += 1
            elif outcome.action in (ResourceAction.UPDATE, ResourceAction.UPDATED):
                summary.updated += 1
            else:
                summary.skipped += 1
        return summary


class SyncResult(BaseModel):
    """Outcome of one reconciliation run.

    ``universe`` is ``None`` when no universe settings are declared.
    """

    universe: ResourceOutcome | None = None
    outcomes: list[ResourceOutcome] = Field(default_factory=list)
    ledger: Ledger = Field(default_factory=Ledger)
    dry_run: bool = False

    def outcomes_for(self, kind: ResourceKind) -> list[ResourceOutcome]:
        return [outcome for outcome in self.outcomes if outcome.kind == kind]

    def summary(self, kind: ResourceKind) -> KindSummary:
        return KindSummary.from_outcomes(self.outcomes_for(kind))


class PublishResult(BaseModel):
    published: list[int] = Field(default_factory=list)
    failed: list[int] = Field(default_factory=list)
    skipped: list[int] = Field(default_factory=list)
