"""
Run an /elo lookup from the terminal, without Discord.

    python scripts/lookup_player.py --lastname Tremblay
    python scripts/lookup_player.py --id 12345 --raw

Prints the exact reply the bot would send. With --raw, also dumps the
raw rating JSON for each time control so payload changes on the FQE side
can be spotted.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import httpx

sys.path.insert(0, str(Path(__file__).parent.parent))

from elobot.config import DEFAULT_FQE_BASE_URL, DEFAULT_TIMEOUT_SECONDS
from elobot.fqe_client import RATING_PATH
from elobot.models import SearchQuery, TimeControl
from elobot.resolver import PlayerResolver


def section(title: str):
    print(f"\n{'='*65}")
    print(f"  {title}")
    print("=" * 65)


async def dump_raw(client: httpx.AsyncClient, member_id: int):
    for tc in TimeControl:
        resp = await client.get(RATING_PATH, params={"id": member_id, "c": tc.code})
        section(f"{tc.value} (c={tc.code}), HTTP {resp.status_code}")
        try:
            print(json.dumps(resp.json(), indent=2, ensure_ascii=False)[:4000])
        except ValueError:
            print(resp.text[:500])


async def run(args):
    query = SearchQuery(
        first_name=args.firstname or "",
        last_name=args.lastname or "",
        member_id=args.id,
    )
    async with httpx.AsyncClient(base_url=args.base_url, timeout=DEFAULT_TIMEOUT_SECONDS) as client:
        section("Reply")
        print(await PlayerResolver(client).resolve(query))

        if args.raw and args.id:
            await dump_raw(client, args.id)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--firstname")
    parser.add_argument("--lastname")
    parser.add_argument("--id", type=int)
    parser.add_argument("--raw", action="store_true", help="Dump raw rating JSON (needs --id)")
    parser.add_argument("--base-url", default=DEFAULT_FQE_BASE_URL)
    asyncio.run(run(parser.parse_args()))
