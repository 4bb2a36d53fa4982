"""
Discord side of the bot: slash command declarations, registration and
process lifecycle.

EloBot is the application context: it owns the config, the shared
httpx.AsyncClient used for every FQE request, and the command router.
Commands are registered on startup (guild scope when DISCORD_GUILD_ID is set,
global otherwise) and removed again on shutdown when REMOVE_COMMANDS=true.
"""

import asyncio
import logging
import signal
from typing import Any, Optional

import discord
import httpx
from discord import app_commands

from elobot.commands import CommandRouter
from elobot.config import BotConfig
from elobot.resolver import PlayerResolver

logger = logging.getLogger(__name__)

DISCORD_MESSAGE_LIMIT = 2000
USER_AGENT = "fqe-elobot/1.0"
COMMAND_ERROR_MESSAGE = "Something went wrong while running this command."


def split_message(text: str, limit: int = DISCORD_MESSAGE_LIMIT) -> list[str]:
    """
    Split a reply into chunks Discord accepts, cutting on line boundaries.
    A single line longer than `limit` is cut hard.
    """
    chunks: list[str] = []
    current = ""
    for line in text.split("\n"):
        while len(line) > limit:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(line[:limit])
            line = line[limit:]

        candidate = f"{current}\n{line}" if current else line
        if len(candidate) > limit:
            chunks.append(current)
            current = line
        else:
            current = candidate

    if current or not chunks:
        chunks.append(current)
    return chunks


class EloBot(discord.Client):
    def __init__(self, config: BotConfig):
        super().__init__(intents=discord.Intents.default())
        self.config = config
        self.tree = app_commands.CommandTree(self)
        self.http_client: Optional[httpx.AsyncClient] = None
        self.router: Optional[CommandRouter] = None
        self.registered_commands: list[app_commands.AppCommand] = []

    @property
    def guild(self) -> Optional[discord.Object]:
        if self.config.guild_id is None:
            return None
        return discord.Object(id=self.config.guild_id)

    async def setup_hook(self) -> None:
        """Called by discord.py during login, before the gateway connects."""
        self.http_client = httpx.AsyncClient(
            base_url=self.config.fqe_base_url,
            timeout=self.config.timeout_seconds,
            headers={"User-Agent": USER_AGENT},
        )
        self.router = CommandRouter(PlayerResolver(self.http_client))

        for command in (ping, elo):
            self.tree.add_command(command, guild=self.guild)

        scope = f"guild {self.config.guild_id}" if self.guild else "globally"
        logger.info(f"Adding commands ({scope})...")
        self.registered_commands = await self.tree.sync(guild=self.guild)
        logger.info(f"Registered: {[c.name for c in self.registered_commands]}")

    async def on_ready(self) -> None:
        logger.info(f"Logged in as: {self.user}")

    async def respond(
        self,
        interaction: discord.Interaction,
        name: str,
        options: dict[str, Any],
        defer: bool = True,
    ) -> None:
        """
        Run a command through the router and send the reply (split if too long).
        With defer=False the first chunk is sent as the immediate response,
        which only suits handlers that make no outbound request.
        """
        if defer:
            await interaction.response.defer(thinking=True)

        try:
            text = await self.router.dispatch(name, options)
        except Exception:
            logger.exception(f"/{name} {options} failed")
            text = COMMAND_ERROR_MESSAGE
        if text is None:
            text = f"Unknown command: {name}"

        chunks = split_message(text)
        if not defer:
            await interaction.response.send_message(chunks[0])
            chunks = chunks[1:]
        for chunk in chunks:
            await interaction.followup.send(chunk)

    async def remove_commands(self) -> None:
        """Delete only the commands this process registered."""
        logger.info("Removing commands...")
        for command in self.registered_commands:
            await command.delete()
            logger.info(f"Removed /{command.name}")
        self.registered_commands = []

    async def close(self) -> None:
        if self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None
        await super().close()


# ─────────────────────────────────────────────────────────────────────────────
# Slash commands
# ─────────────────────────────────────────────────────────────────────────────

@app_commands.command(name="ping", description="Ping Pong Test!")
async def ping(interaction: discord.Interaction):
    await interaction.client.respond(interaction, "ping", {}, defer=False)


@app_commands.command(name="elo", description="Retrieve a player's ELO, at least 1 option is required")
@app_commands.guild_only()
@app_commands.rename(member_id="id")
@app_commands.describe(
    firstname="Prenom/First name",
    lastname="Nom/Last name",
    member_id="Matricule/ID FQE",
)
async def elo(
    interaction: discord.Interaction,
    firstname: Optional[str] = None,
    lastname: Optional[str] = None,
    member_id: Optional[app_commands.Range[int, 1]] = None,
):
    options = {"firstname": firstname, "lastname": lastname, "id": member_id}
    await interaction.client.respond(
        interaction, "elo", {k: v for k, v in options.items() if v is not None}
    )


# ─────────────────────────────────────────────────────────────────────────────
# Lifecycle
# ─────────────────────────────────────────────────────────────────────────────

async def run_bot(config: BotConfig, stop: Optional[asyncio.Event] = None) -> None:
    """
    Log in, register commands, run until SIGINT/SIGTERM (or until `stop` is
    set, when given), then optionally remove the commands and shut down.
    Startup failures propagate.
    """
    bot = EloBot(config)

    if stop is None:
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop.set)
            except NotImplementedError:
                # Windows: KeyboardInterrupt still ends asyncio.run()
                pass

    runner: Optional[asyncio.Task] = None
    try:
        await bot.login(config.token)
        runner = asyncio.create_task(bot.connect())
        waiter = asyncio.create_task(stop.wait())
        logger.info("Press Ctrl+C to exit")

        done, _ = await asyncio.wait({runner, waiter}, return_when=asyncio.FIRST_COMPLETED)
        waiter.cancel()
        if runner in done:
            # Gateway connection ended on its own: surface the error, if any
            runner.result()
            return

        if config.remove_commands:
            await bot.remove_commands()
    finally:
        await bot.close()
        if runner is not None and not runner.done():
            runner.cancel()

    logger.info("Gracefully shutting down.")
