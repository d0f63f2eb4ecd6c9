"""Directory gateway protocol.

The assignment engine talks to the guild directory only through this
interface. Implementations translate their transport errors into
DirectoryUnavailable; retries and rate limiting are their concern.
"""

from __future__ import annotations

from typing import Protocol

from senkyoku.models.district import RoleRecord


class DirectoryGateway(Protocol):
    """Read and write access to guild roles and member role sets."""

    async def list_roles(self) -> list[RoleRecord]:
        """Fetch every role in the guild, in the order the directory returns them."""
        ...

    async def remove_role(self, member_id: str, role_id: str) -> None: ...

    async def add_role(self, member_id: str, role_id: str) -> None: ...
