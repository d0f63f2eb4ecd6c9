"""Discord-backed directory gateway.

Reads guild roles over REST (not the gateway cache, which may lag behind
role edits) and adds or removes member roles one call at a time.
discord.py's HTTP client handles rate limits; any HTTPException that still
comes back is translated to DirectoryUnavailable.
"""

from __future__ import annotations

import logging

import discord

from senkyoku.core.errors import DirectoryUnavailable
from senkyoku.models.district import RoleRecord

logger = logging.getLogger(__name__)

AUDIT_REASON = "/senkyoku district selection"


class DiscordDirectoryGateway:
    """DirectoryGateway over one guild.

    ``member`` is the invoking member when known, so role writes for them
    don't need an extra fetch.
    """

    def __init__(self, guild: discord.Guild, member: discord.Member | None = None) -> None:
        self.guild = guild
        self.member = member

    async def list_roles(self) -> list[RoleRecord]:
        try:
            roles = await self.guild.fetch_roles()
        except discord.HTTPException as exc:
            raise DirectoryUnavailable(f"fetch_roles failed: {exc}") from exc
        return [RoleRecord(id=str(role.id), name=role.name) for role in roles]

    async def remove_role(self, member_id: str, role_id: str) -> None:
        member = await self._resolve_member(member_id)
        try:
            await member.remove_roles(discord.Object(id=int(role_id)), reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise DirectoryUnavailable(f"remove_roles failed: {exc}") from exc
        logger.debug("discord_role_removed member=%s role=%s", member_id, role_id)

    async def add_role(self, member_id: str, role_id: str) -> None:
        member = await self._resolve_member(member_id)
        try:
            await member.add_roles(discord.Object(id=int(role_id)), reason=AUDIT_REASON)
        except discord.HTTPException as exc:
            raise DirectoryUnavailable(f"add_roles failed: {exc}") from exc
        logger.debug("discord_role_added member=%s role=%s", member_id, role_id)

    async def _resolve_member(self, member_id: str) -> discord.Member:
        if self.member is not None and str(self.member.id) == member_id:
            return self.member
        member = self.guild.get_member(int(member_id))
        if member is not None:
            return member
        try:
            return await self.guild.fetch_member(int(member_id))
        except discord.HTTPException as exc:
            raise DirectoryUnavailable(f"fetch_member failed: {exc}") from exc
