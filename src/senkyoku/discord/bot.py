"""Discord bot for senkyoku.

Runs alongside FastAPI using the same event loop and exposes a single
slash command, /senkyoku, which moves the invoking member into one
electoral sub-district role inside their prefecture.

The bot is optional: if DISCORD_BOT_TOKEN is not set, nothing starts.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Collection
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import discord
from discord import Intents, app_commands
from discord.ext import commands

from senkyoku.core.assignment import assign_district
from senkyoku.discord.gateway import DiscordDirectoryGateway
from senkyoku.discord.messages import (
    COMMAND_DESCRIPTION,
    COMMAND_NAME,
    MSG_GUILD_ONLY,
    MSG_UNEXPECTED,
    OPTION_DESCRIPTION,
    OPTION_NAME,
    render_outcome,
)
from senkyoku.models.constants import KNOWN_PREFECTURES
from senkyoku.models.district import DistrictCommand

if TYPE_CHECKING:
    from senkyoku.config import Settings
    from senkyoku.core.district_table import DistrictTable

logger = logging.getLogger(__name__)


class SenkyokuBot(commands.Bot):
    """The senkyoku Discord bot.

    Holds the read-only district table and prefecture set for the life of
    the process; everything else is built per interaction.
    """

    def __init__(
        self,
        settings: Settings,
        district_table: DistrictTable,
        prefectures: Collection[str] = KNOWN_PREFECTURES,
    ) -> None:
        intents = Intents.default()

        super().__init__(
            command_prefix="!",
            intents=intents,
            description="選挙区ロール付与ボット",
        )
        self.settings = settings
        self.district_table = district_table
        self.prefectures = frozenset(prefectures)
        self.runner_task: asyncio.Task[None] | None = None
        self._setup_commands()

    def _setup_commands(self) -> None:
        """Register slash commands on the bot's command tree."""

        @self.tree.command(name=COMMAND_NAME, description=COMMAND_DESCRIPTION)
        @app_commands.rename(district=OPTION_NAME)
        @app_commands.describe(district=OPTION_DESCRIPTION)
        async def senkyoku_command(interaction: discord.Interaction, district: str) -> None:
            await self._handle_senkyoku(interaction, district)

    async def setup_hook(self) -> None:
        """Called when the bot is ready to start. Syncs slash commands."""
        if self.settings.discord_guild_id:
            guild = discord.Object(id=int(self.settings.discord_guild_id))
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            logger.info("discord_commands_synced guild_id=%s", self.settings.discord_guild_id)
        else:
            await self.tree.sync()
            logger.info("discord_commands_synced globally")

    async def on_ready(self) -> None:
        """Called on every (re)connect to Discord."""
        user = self.user
        logger.info("discord_bot_ready user=%s", user.name if user else "unknown")

    async def _handle_senkyoku(self, interaction: discord.Interaction, raw_input: str) -> None:
        """Handle the /senkyoku slash command."""
        interaction_age = (datetime.now(UTC) - interaction.created_at).total_seconds()
        logger.info(
            "senkyoku_interaction_received user=%s input=%r age_seconds=%.3f",
            interaction.user.id if interaction.user else "unknown",
            raw_input,
            interaction_age,
        )

        guild = interaction.guild
        member = interaction.user
        if guild is None or not isinstance(member, discord.Member):
            await interaction.response.send_message(MSG_GUILD_ONLY, ephemeral=True)
            return

        # Defer immediately: role listing plus several role writes can exceed
        # the 3s interaction timeout.
        try:
            await interaction.response.defer(ephemeral=True)
        except (discord.NotFound, discord.HTTPException) as defer_err:
            logger.warning(
                "senkyoku_defer_expired user=%s age_seconds=%.3f err=%s",
                member.id,
                interaction_age,
                defer_err,
            )
            return

        command = DistrictCommand(
            member_id=str(member.id),
            member_role_ids=tuple(str(role.id) for role in member.roles if not role.is_default()),
            raw_input=raw_input,
        )
        gateway = DiscordDirectoryGateway(guild, member)

        try:
            outcome = await assign_district(
                command,
                gateway,
                self.district_table,
                self.prefectures,
            )
        except Exception:  # Last-resort handler, the member still gets a reply
            logger.exception("senkyoku_failed user=%s input=%r", member.id, raw_input)
            content = MSG_UNEXPECTED
        else:
            content = render_outcome(outcome)

        await self._send_reply(interaction, content)

    async def _send_reply(self, interaction: discord.Interaction, content: str) -> None:
        """Send the single ephemeral follow-up. Delivery failure is only logged."""
        try:
            await interaction.followup.send(content, ephemeral=True)
        except discord.HTTPException as exc:
            logger.warning(
                "senkyoku_reply_failed interaction=%s err=%s",
                interaction.id,
                exc,
            )


def is_discord_enabled(settings: Settings) -> bool:
    """Check whether Discord integration should be started.

    Returns True only when discord_enabled is True and a token is set.
    """
    return bool(settings.discord_enabled and settings.discord_bot_token)


async def start_discord_bot(
    settings: Settings,
    district_table: DistrictTable,
) -> SenkyokuBot:
    """Create and start the Discord bot in the current event loop.

    Returns the bot instance so the caller can stop it during shutdown.
    The bot runs as a background task; this function returns immediately
    after starting it.
    """
    bot = SenkyokuBot(settings=settings, district_table=district_table)

    async def _run_bot() -> None:
        try:
            await bot.start(settings.discord_bot_token)
        except asyncio.CancelledError:
            logger.info("discord_bot_cancelled")
        except Exception:  # Last-resort handler: bot.start can raise connection and auth errors
            logger.exception("discord_bot_error")
        finally:
            if not bot.is_closed():
                await bot.close()

    bot.runner_task = asyncio.create_task(_run_bot(), name="discord-bot")
    logger.info("discord_bot_started")
    return bot
