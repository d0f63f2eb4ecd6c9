"""District assignment: one /senkyoku invocation, end to end.

Flow: normalize the input, snapshot the guild roles, resolve the member's
prefecture, bound-check against the district table, plan, apply. Every
failure becomes exactly one ``AssignmentOutcome``.

Concurrency: each invocation runs in its own task and shares nothing but
the read-only district table and prefecture set. Two simultaneous requests
from the same member are not serialized; whichever write Discord sees last
wins. Re-running the command repairs a lost update.
"""

from __future__ import annotations

import logging
from collections.abc import Collection

from senkyoku.core.district_table import DistrictTable, require_max_district
from senkyoku.core.errors import (
    DirectoryUnavailable,
    DistrictLookupError,
    DistrictOutOfRange,
    InputInvalid,
    PrefectureUnresolved,
    RoleWriteFailed,
    TargetRoleMissing,
)
from senkyoku.core.gateway import DirectoryGateway
from senkyoku.core.numerals import normalize_number
from senkyoku.core.planner import apply_plan, district_role_name, plan_transition
from senkyoku.core.prefecture import resolve_prefecture, role_name_index
from senkyoku.models.constants import KNOWN_PREFECTURES
from senkyoku.models.district import AssignmentOutcome, DistrictCommand, OutcomeKind

logger = logging.getLogger(__name__)


def parse_district(raw_input: str) -> int:
    """Normalize raw input to a district index, raising InputInvalid on failure."""
    district = normalize_number(raw_input)
    if district is None:
        raise InputInvalid(raw_input)
    return district


async def assign_district(
    command: DistrictCommand,
    gateway: DirectoryGateway,
    table: DistrictTable,
    prefectures: Collection[str] = KNOWN_PREFECTURES,
) -> AssignmentOutcome:
    """Move the invoking member into the requested district.

    Never raises for the expected failure kinds; the returned outcome says
    which one happened.
    """
    prefecture: str | None = None
    district: int | None = None
    try:
        district = parse_district(command.raw_input)

        directory = await gateway.list_roles()
        prefecture = resolve_prefecture(
            command.member_role_ids, role_name_index(directory), prefectures
        )
        if prefecture is None:
            raise PrefectureUnresolved(command.member_id)

        max_district = await require_max_district(table, prefecture)
        plan = plan_transition(
            prefecture,
            district,
            max_district,
            directory,
            command.member_role_ids,
        )
        applied = await apply_plan(gateway, command.member_id, plan)

    except InputInvalid:
        logger.info(
            "district_input_invalid member=%s input=%r",
            command.member_id,
            command.raw_input,
        )
        return AssignmentOutcome(kind=OutcomeKind.INPUT_INVALID)

    except PrefectureUnresolved:
        logger.info("district_no_prefecture member=%s", command.member_id)
        return AssignmentOutcome(kind=OutcomeKind.PREFECTURE_UNRESOLVED, district=district)

    except DistrictLookupError as exc:
        logger.error(
            "district_count_unavailable member=%s prefecture=%s reason=%s",
            command.member_id,
            exc.prefecture,
            exc.reason,
        )
        return AssignmentOutcome(
            kind=OutcomeKind.LOOKUP_FAILED,
            prefecture=exc.prefecture,
            district=district,
        )

    except DistrictOutOfRange as exc:
        logger.info(
            "district_out_of_range member=%s prefecture=%s max=%d requested=%d",
            command.member_id,
            exc.prefecture,
            exc.max_district,
            exc.requested,
        )
        return AssignmentOutcome(
            kind=OutcomeKind.OUT_OF_RANGE,
            prefecture=exc.prefecture,
            district=exc.requested,
            max_district=exc.max_district,
        )

    except TargetRoleMissing as exc:
        logger.error(
            "district_role_missing member=%s prefecture=%s role=%s",
            command.member_id,
            prefecture,
            exc.role_name,
        )
        return AssignmentOutcome(
            kind=OutcomeKind.TARGET_ROLE_MISSING,
            prefecture=prefecture,
            district=district,
            role_name=exc.role_name,
        )

    except RoleWriteFailed as exc:
        return AssignmentOutcome(
            kind=OutcomeKind.WRITE_FAILED,
            prefecture=prefecture,
            district=district,
            role_name=district_role_name(district) if district else None,
            removed=exc.removed,
            failed_removals=exc.failed_removals,
        )

    except DirectoryUnavailable as exc:
        logger.warning(
            "directory_unavailable member=%s err=%s",
            command.member_id,
            exc,
        )
        return AssignmentOutcome(
            kind=OutcomeKind.DIRECTORY_UNAVAILABLE,
            prefecture=prefecture,
            district=district,
        )

    logger.info(
        "district_assigned member=%s prefecture=%s role=%s removed=%d failed_removals=%d",
        command.member_id,
        plan.prefecture,
        plan.target_role_name,
        len(applied.removed),
        len(applied.failed_removals),
    )
    return AssignmentOutcome(
        kind=OutcomeKind.SUCCESS,
        prefecture=plan.prefecture,
        district=plan.target_district,
        role_name=plan.target_role_name,
        removed=applied.removed,
        failed_removals=applied.failed_removals,
    )
