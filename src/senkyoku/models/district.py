"""District assignment models: role snapshots, commands, plans, outcomes.

Every model here is request-scoped and frozen. A request builds them once
from a single directory snapshot and discards them after the reply.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class RoleRecord(BaseModel):
    """A guild role as seen in one directory snapshot."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class DistrictCommand(BaseModel):
    """An inbound /senkyoku invocation.

    ``member_role_ids`` keeps the order Discord reported; the prefecture
    tie-break depends on it.
    """

    model_config = ConfigDict(frozen=True)

    member_id: str
    member_role_ids: tuple[str, ...] = ()
    raw_input: str = ""


class RoleTransitionPlan(BaseModel):
    """Role IDs to strip from a member and the single role ID to grant."""

    model_config = ConfigDict(frozen=True)

    prefecture: str
    target_district: int = Field(ge=1)
    target_role_name: str
    to_remove: frozenset[str] = frozenset()
    to_add: str


class AppliedTransition(BaseModel):
    """What actually happened when a plan was pushed to the directory."""

    model_config = ConfigDict(frozen=True)

    removed: tuple[str, ...] = ()
    failed_removals: tuple[str, ...] = ()
    added: str | None = None


class OutcomeKind(StrEnum):
    """The distinct results a /senkyoku invocation can end in."""

    SUCCESS = "success"
    INPUT_INVALID = "input_invalid"
    PREFECTURE_UNRESOLVED = "prefecture_unresolved"
    LOOKUP_FAILED = "lookup_failed"
    OUT_OF_RANGE = "out_of_range"
    TARGET_ROLE_MISSING = "target_role_missing"
    DIRECTORY_UNAVAILABLE = "directory_unavailable"
    WRITE_FAILED = "write_failed"


class AssignmentOutcome(BaseModel):
    """Result of one district assignment, ready to be rendered as a reply."""

    model_config = ConfigDict(frozen=True)

    kind: OutcomeKind
    prefecture: str | None = None
    district: int | None = None
    max_district: int | None = None
    role_name: str | None = None
    removed: tuple[str, ...] = ()
    failed_removals: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.kind is OutcomeKind.SUCCESS
