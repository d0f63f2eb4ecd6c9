"""Exceptions raised by the district assignment engine.

Each class maps to exactly one user-visible outcome. ``assign_district``
catches them and turns them into an ``AssignmentOutcome``; nothing here is
meant to escape to the Discord event loop.
"""

from __future__ import annotations

from collections.abc import Sequence


class SenkyokuError(Exception):
    """Base class for district assignment failures."""


class InputInvalid(SenkyokuError):
    """The district number could not be parsed, or parsed as zero."""

    def __init__(self, raw_input: str) -> None:
        super().__init__(f"no valid district number in {raw_input!r}")
        self.raw_input = raw_input


class PrefectureUnresolved(SenkyokuError):
    """The member holds no recognised prefecture role."""

    def __init__(self, member_id: str) -> None:
        super().__init__(f"member {member_id} has no prefecture role")
        self.member_id = member_id


class DistrictLookupError(SenkyokuError):
    """District-count data for a known prefecture is unavailable."""

    def __init__(self, prefecture: str, reason: str = "") -> None:
        detail = f": {reason}" if reason else ""
        super().__init__(f"district count unavailable for {prefecture}{detail}")
        self.prefecture = prefecture
        self.reason = reason


class DistrictOutOfRange(SenkyokuError):
    """The requested district exceeds the prefecture's district count."""

    def __init__(self, prefecture: str, max_district: int, requested: int) -> None:
        super().__init__(
            f"{prefecture} has {max_district} districts, {requested} requested"
        )
        self.prefecture = prefecture
        self.max_district = max_district
        self.requested = requested


class TargetRoleMissing(SenkyokuError):
    """The guild has no role with the canonical district-role name."""

    def __init__(self, role_name: str) -> None:
        super().__init__(f"role {role_name!r} does not exist in the guild")
        self.role_name = role_name


class DirectoryUnavailable(SenkyokuError):
    """A remote directory call failed at the transport level."""


class RoleWriteFailed(SenkyokuError):
    """Adding the target district role failed.

    Removals that ran before the failed add are reported alongside so the
    caller can log what state the member was left in.
    """

    def __init__(
        self,
        role_id: str,
        removed: Sequence[str] = (),
        failed_removals: Sequence[str] = (),
    ) -> None:
        super().__init__(f"failed to add role {role_id}")
        self.role_id = role_id
        self.removed = tuple(removed)
        self.failed_removals = tuple(failed_removals)
