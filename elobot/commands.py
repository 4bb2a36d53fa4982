"""
Slash command router: command name → handler returning the reply text.

Handlers are plain coroutines taking the resolver and the options the user
filled in, so they can be exercised without a Discord connection.
The Discord side (elobot/bot.py) declares the commands and forwards here.
"""

import logging
from typing import Any, Awaitable, Callable, Optional

from elobot.models import SearchQuery
from elobot.resolver import MISSING_OPTIONS_MESSAGE, PlayerResolver

logger = logging.getLogger(__name__)

Handler = Callable[[PlayerResolver, dict[str, Any]], Awaitable[str]]


def parse_search_query(options: dict[str, Any]) -> SearchQuery:
    """Build a SearchQuery from the /elo options. Missing options stay empty."""
    member_id = options.get("id")
    return SearchQuery(
        first_name=(options.get("firstname") or "").strip(),
        last_name=(options.get("lastname") or "").strip(),
        member_id=int(member_id) if member_id is not None else None,
    )


async def ping_command(resolver: PlayerResolver, options: dict[str, Any]) -> str:
    return "Pong!"


async def elo_command(resolver: PlayerResolver, options: dict[str, Any]) -> str:
    supplied = {k: v for k, v in options.items() if v is not None}
    if not supplied:
        return MISSING_OPTIONS_MESSAGE

    query = parse_search_query(supplied)
    return await resolver.resolve(query)


COMMAND_HANDLERS: dict[str, Handler] = {
    "ping": ping_command,
    "elo": elo_command,
}


class CommandRouter:
    def __init__(self, resolver: PlayerResolver, handlers: Optional[dict[str, Handler]] = None):
        self.resolver = resolver
        self.handlers = handlers if handlers is not None else COMMAND_HANDLERS

    async def dispatch(self, name: str, options: Optional[dict[str, Any]] = None) -> Optional[str]:
        """Run the handler for `name`. Returns None for unknown commands."""
        handler = self.handlers.get(name)
        if handler is None:
            logger.warning(f"No handler for command '{name}'")
            return None

        logger.info(f"/{name} {options or {}}")
        return await handler(self.resolver, options or {})
