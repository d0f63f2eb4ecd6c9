"""Derive a member's prefecture from the roles they already hold."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping

from senkyoku.models.district import RoleRecord


def role_name_index(directory: Iterable[RoleRecord]) -> dict[str, str]:
    """Map role ID to role name for one directory snapshot."""
    return {role.id: role.name for role in directory}


def resolve_prefecture(
    member_role_ids: Iterable[str],
    directory: Mapping[str, str],
    known_prefectures: Collection[str],
) -> str | None:
    """Return the prefecture role the member holds, or None.

    Role IDs are scanned in the order given. If a member somehow holds two
    prefecture roles, the one that appears first in ``member_role_ids``
    wins. Role IDs missing from ``directory`` are skipped.
    """
    for role_id in member_role_ids:
        name = directory.get(role_id)
        if name is not None and name in known_prefectures:
            return name
    return None
