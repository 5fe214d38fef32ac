"""Mutation plans and the guard that decides whether a remote write may run."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ErrorCategory, ErrorCode, MonarchError


class OperationTier(str, Enum):
    """How much an operation changes remote state."""

    READ = "read"
    REMOTE_ACTION = "remote_action"
    MUTATION = "mutation"
    DESTRUCTIVE = "destructive"


@dataclass
class PlannedMutation:
    """A single change that a command would make."""

    operation: str
    resource_id: str = ""
    before: Any = None
    after: Any = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form, leaving out empty fields."""
        result: dict[str, Any] = {"operation": self.operation}
        if self.resource_id:
            result["resource_id"] = self.resource_id
        if self.before is not None:
            result["before"] = self.before
        if self.after is not None:
            result["after"] = self.after
        return result


@dataclass
class Plan:
    """The list of changes a dry run would perform."""

    planned_mutations: list[PlannedMutation] = field(default_factory=list)

    def add(self, op: str, resource_id: str, before: Any = None, after: Any = None) -> None:
        """Record one planned change."""
        self.planned_mutations.append(PlannedMutation(op, resource_id, before, after))

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready form of the plan."""
        return {"planned_mutations": [m.to_dict() for m in self.planned_mutations]}


def check(tier: OperationTier, read_only: bool, dry_run: bool, confirmed: bool) -> None:
    """Raise MonarchError unless an operation of this tier may proceed."""
    tier = OperationTier(tier)
    if tier is OperationTier.READ:
        return
    if read_only:
        raise MonarchError(
            ErrorCode.READ_ONLY_VIOLATION,
            "remote writes are blocked in read-only mode",
            ErrorCategory.SAFETY,
        )
    if dry_run:
        # A dry run makes no remote changes.
        return
    if not confirmed:
        raise MonarchError(
            ErrorCode.CONFIRMATION_REQUIRED,
            f"this {tier.value} operation requires --confirm to execute",
            ErrorCategory.SAFETY,
        )