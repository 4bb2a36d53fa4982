"""
FQE client: Fédération québécoise des échecs member search and rating history.

Endpoints used:
  POST /membres/list-membres.php?c=Qui     (multipart form: FName, Name, Matricule)
       → HTML page, players appear as <a href="index.php?Id=NUMBER">NAME</a>
  GET  /membres/json-cote.php?id={id}&c={1|2|3}
       → JSON array of {"Quand": date, "Cote": rating}, oldest first

The site has no API contract: the member list is scraped with a regex and
will break if the markup changes. Every function takes the shared
httpx.AsyncClient (created once by the bot with base_url and timeout).
"""

import asyncio
import html
import logging
import re
from typing import Any, Optional

import httpx

from elobot.models import Player, PlayerSearchResult, RatingEntry, SearchQuery, TimeControl

logger = logging.getLogger(__name__)

SEARCH_PATH = "/membres/list-membres.php"
RATING_PATH = "/membres/json-cote.php"

MEMBER_LINK_RE = re.compile(r'<a href="index\.php\?Id=(\d+)">(.*?)</a>')
MAX_MEMBER_ID = 2**31 - 1


class FQEError(Exception):
    """Base error for FQE lookups. The message is shown to the user as is."""
    default_message = "FQE request failed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class RequestFailedError(FQEError):
    default_message = "Request failed"


class ResponseReadError(FQEError):
    default_message = "Error reading response body"


class InvalidSearchResultError(FQEError):
    default_message = "Invalid ID in search results"


async def _send(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> httpx.Response:
    """Run one request, translating httpx errors into FQEError subclasses."""
    try:
        resp = await client.request(method, url, **kwargs)
    except (httpx.ReadError, httpx.RemoteProtocolError, httpx.DecodingError) as e:
        logger.error(f"FQE {method} {url}: error reading response: {e!r}")
        raise ResponseReadError() from e
    except httpx.RequestError as e:
        logger.error(f"FQE {method} {url}: request failed: {e!r}")
        raise RequestFailedError() from e

    if resp.is_error:
        # The site answers errors with HTML pages; callers still parse the body.
        logger.warning(f"FQE {method} {url}: HTTP {resp.status_code}")
    return resp


# ─────────────────────────────────────────────────────────────────────────────
# Member search
# ─────────────────────────────────────────────────────────────────────────────

def build_search_form(query: SearchQuery) -> dict[str, tuple[None, str]]:
    """
    Multipart fields for the member search form. Only non-empty fields are sent.
    Values are (None, value) tuples so httpx encodes them as plain form fields.
    """
    form = {}
    if query.first_name:
        form["FName"] = (None, query.first_name)
    if query.last_name:
        form["Name"] = (None, query.last_name)
    if query.member_id:
        form["Matricule"] = (None, str(query.member_id))
    return form


def parse_member_list(page: str) -> list[PlayerSearchResult]:
    """
    Extract every member link from the search results page, in page order.
    One bad ID fails the whole page.
    """
    results = []
    for raw_id, raw_name in MEMBER_LINK_RE.findall(page):
        member_id = int(raw_id)
        if member_id > MAX_MEMBER_ID:
            raise InvalidSearchResultError()
        results.append(PlayerSearchResult(name=html.unescape(raw_name).strip(), member_id=member_id))
    return results


async def search_members(client: httpx.AsyncClient, query: SearchQuery) -> list[PlayerSearchResult]:
    form = build_search_form(query)
    logger.info(f"FQE member search: {sorted(form)}")

    resp = await _send(client, "POST", SEARCH_PATH, params={"c": "Qui"}, files=form)
    results = parse_member_list(resp.text)
    logger.info(f"FQE member search returned {len(results)} player(s)")
    return results


# ─────────────────────────────────────────────────────────────────────────────
# Rating history
# ─────────────────────────────────────────────────────────────────────────────

def parse_rating_entries(payload: Any) -> list[RatingEntry]:
    """
    Convert the decoded json-cote.php payload into RatingEntry objects.
    Raises ValueError if the payload does not have the expected shape.
    A JSON null is an empty history.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise ValueError(f"expected a JSON array, got {type(payload).__name__}")

    entries = []
    for item in payload:
        if not isinstance(item, dict):
            raise ValueError(f"invalid rating entry {item!r}")
        date, value = item.get("Quand"), item.get("Cote")
        # bool is an int subclass; floats, strings and bools are rejected
        if not isinstance(date, str) or not isinstance(value, int) or isinstance(value, bool):
            raise ValueError(f"invalid rating entry {item!r}")
        entries.append(RatingEntry(date=date, value=value))
    return entries


async def _fetch_time_control(
    client: httpx.AsyncClient,
    member_id: int,
    time_control: TimeControl,
) -> Optional[list[RatingEntry]]:
    """
    Rating history for one time control, or None when the body cannot be decoded.
    Transport errors propagate.
    """
    resp = await _send(
        client, "GET", RATING_PATH,
        params={"id": member_id, "c": time_control.code},
    )
    try:
        entries = parse_rating_entries(resp.json())
    except ValueError as e:
        # json.JSONDecodeError and UnicodeDecodeError are ValueErrors too
        logger.warning(f"FQE rating {member_id}/{time_control.value}: unusable payload ({e})")
        return None

    logger.debug(f"FQE rating {member_id}/{time_control.value}: {len(entries)} entries")
    return entries


async def fetch_player_rating(client: httpx.AsyncClient, member_id: int) -> Player:
    """
    Fetch the three rating histories of a member concurrently.
    Any transport failure aborts the whole fetch; an undecodable time control
    is left out of the result.
    """
    time_controls = list(TimeControl)
    histories = await asyncio.gather(
        *(_fetch_time_control(client, member_id, tc) for tc in time_controls)
    )

    player = Player(member_id=member_id)
    for tc, entries in zip(time_controls, histories):
        if entries is not None:
            player.ratings[tc] = entries

    logger.info(f"FQE rating {member_id}: {[tc.value for tc in player.ratings]}")
    return player
