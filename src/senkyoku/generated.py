"""Generated channel and role lookup tables.

A generator script overwrites ``_CHANNELS`` and ``_ROLES`` and clears
``_NOT_GENERATED``. Until it has run, both accessors raise
NotGeneratedError instead of returning empty data.
"""

from __future__ import annotations

from dataclasses import dataclass, field


class NotGeneratedError(RuntimeError):
    """Raised when lookup tables are requested before generation."""


@dataclass(frozen=True)
class ChannelInfo:
    id: str
    name: str
    is_private: bool = False
    allowed_roles: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class RoleInfo:
    id: str
    name: str


_CHANNELS: dict[str, ChannelInfo] = {}
_ROLES: dict[str, RoleInfo] = {}
_NOT_GENERATED: str | None = "not implemented"


def channels() -> dict[str, ChannelInfo]:
    """Return the generated channel mapping."""
    if _NOT_GENERATED is not None:
        raise NotGeneratedError(_NOT_GENERATED)
    return dict(_CHANNELS)


def roles() -> dict[str, RoleInfo]:
    """Return the generated role mapping."""
    if _NOT_GENERATED is not None:
        raise NotGeneratedError(_NOT_GENERATED)
    return dict(_ROLES)
