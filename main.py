"""
FQE ELO bot: Discord slash commands for Fédération québécoise des échecs ratings.
Entry point: loads .env, parses flags, runs the bot until Ctrl+C.
"""

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv()

from elobot.bot import run_bot
from elobot.config import ConfigError, load_config

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger("elobot")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="FQE ELO Discord bot")
    parser.add_argument("--guild", default=None,
                        help="Test guild ID. If not passed, commands are registered globally")
    parser.add_argument("--token", default=None, help="Bot access token")
    parser.add_argument("--rmcmd", action=argparse.BooleanOptionalAction, default=None,
                        help="Remove all commands when shutting down")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    try:
        config = load_config(token=args.token, guild=args.guild, remove_commands=args.rmcmd)
    except ConfigError as e:
        log.error(f"Invalid bot parameters: {e}")
        return 1

    try:
        asyncio.run(run_bot(config))
    except KeyboardInterrupt:
        log.info("Interrupted")
    except Exception:
        log.exception("Bot stopped with an error")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
