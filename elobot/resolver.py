"""
Player resolver: turns an /elo query into the text sent back to the channel.

Flow:
  1. Name given → member search (with the ID as Matricule if also given)
       0 matches  → "No players found! :("
       1 match    → rating fetch for that member
       N matches  → list "Name, ID" lines, no rating fetch
  2. Only an ID given → rating fetch for that ID, no search

FQE errors never escape: they are rendered in the reply.
"""

import logging

import httpx

from elobot.fqe_client import FQEError, fetch_player_rating, search_members
from elobot.models import PlayerSearchResult, SearchQuery

logger = logging.getLogger(__name__)

MISSING_OPTIONS_MESSAGE = "At least one option is required!"
NO_PLAYERS_MESSAGE = "No players found! :("


def format_player_list(players: list[PlayerSearchResult]) -> str:
    lines = [f"{p.name}, {p.member_id}" for p in players]
    return "Found players:\n" + "\n".join(lines)


class PlayerResolver:
    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def rating_block(self, member_id: int) -> str:
        try:
            player = await fetch_player_rating(self.client, member_id)
        except FQEError as e:
            logger.error(f"Rating fetch failed for {member_id}: {e}")
            return f"Error getting player ELO info: {e}"
        return player.summary

    async def resolve(self, query: SearchQuery) -> str:
        if query.is_empty:
            return MISSING_OPTIONS_MESSAGE

        if not query.has_name:
            block = await self.rating_block(query.member_id)
            return f"ID: {query.member_id}\n\nFQE rating:\n{block}"

        try:
            players = await search_members(self.client, query)
        except FQEError as e:
            logger.error(f"Member search failed for {query}: {e}")
            return f"Failed to search for player: {e}"

        if not players:
            return NO_PLAYERS_MESSAGE

        if len(players) > 1:
            return format_player_list(players)

        match = players[0]
        block = await self.rating_block(match.member_id)
        return f"Name: {match.name}\nID: {match.member_id}\n\nFQE rating:\n{block}"
