"""Role transition planning and application.

``plan_transition`` is pure: given one directory snapshot it decides which
district roles to strip and which one to grant. ``apply_plan`` pushes that
decision to the directory.

Application policy: removals run first and each one is independent. A
failed removal is logged and the rest still run, including the add, since a
member left holding both an old and a new district role is worse than one
holding a stray old role. A failed add always fails the whole request.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from senkyoku.core.errors import (
    DirectoryUnavailable,
    DistrictOutOfRange,
    RoleWriteFailed,
    TargetRoleMissing,
)
from senkyoku.core.gateway import DirectoryGateway
from senkyoku.models.constants import DISTRICT_SUFFIX
from senkyoku.models.district import AppliedTransition, RoleRecord, RoleTransitionPlan

logger = logging.getLogger(__name__)

DISTRICT_ROLE_PATTERN = re.compile(r"^[0-9]+" + re.escape(DISTRICT_SUFFIX) + r"$")


def district_role_name(district: int) -> str:
    """Canonical role name for a district index: ``3`` -> ``"3区"``."""
    return f"{district}{DISTRICT_SUFFIX}"


def find_role(directory: Iterable[RoleRecord], name: str) -> RoleRecord | None:
    """Return the first role in directory order with exactly this name."""
    for role in directory:
        if role.name == name:
            return role
    return None


def plan_transition(
    prefecture: str,
    target_district: int,
    max_district: int,
    directory: Sequence[RoleRecord],
    member_role_ids: Iterable[str],
    pattern: re.Pattern[str] = DISTRICT_ROLE_PATTERN,
) -> RoleTransitionPlan:
    """Compute the role changes that move a member into ``target_district``.

    Raises DistrictOutOfRange when the index exceeds ``max_district`` and
    TargetRoleMissing when the guild has no role with the canonical name.
    Every held role whose name matches ``pattern`` is scheduled for removal,
    except the target role itself.
    """
    if target_district > max_district:
        raise DistrictOutOfRange(prefecture, max_district, target_district)

    role_name = district_role_name(target_district)
    target = find_role(directory, role_name)
    if target is None:
        raise TargetRoleMissing(role_name)

    names = {role.id: role.name for role in directory}
    to_remove = frozenset(
        role_id
        for role_id in member_role_ids
        if role_id != target.id and pattern.fullmatch(names.get(role_id, ""))
    )
    return RoleTransitionPlan(
        prefecture=prefecture,
        target_district=target_district,
        target_role_name=role_name,
        to_remove=to_remove,
        to_add=target.id,
    )


async def apply_plan(
    gateway: DirectoryGateway,
    member_id: str,
    plan: RoleTransitionPlan,
) -> AppliedTransition:
    """Apply a plan: every removal (best-effort), then the single add.

    Raises RoleWriteFailed if the add fails, carrying the removal results.
    """
    removed: list[str] = []
    failed: list[str] = []
    for role_id in sorted(plan.to_remove):
        try:
            await gateway.remove_role(member_id, role_id)
        except DirectoryUnavailable as exc:
            logger.warning(
                "district_role_remove_failed member=%s role=%s err=%s",
                member_id,
                role_id,
                exc,
            )
            failed.append(role_id)
        else:
            removed.append(role_id)

    try:
        await gateway.add_role(member_id, plan.to_add)
    except DirectoryUnavailable as exc:
        logger.warning(
            "district_role_add_failed member=%s role=%s removed=%d err=%s",
            member_id,
            plan.to_add,
            len(removed),
            exc,
        )
        raise RoleWriteFailed(plan.to_add, removed, failed) from exc

    return AppliedTransition(
        removed=tuple(removed),
        failed_removals=tuple(failed),
        added=plan.to_add,
    )
