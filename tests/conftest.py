"""
Pytest configuration and fixtures for the FQE ELO bot tests
"""

import json
import sys
from pathlib import Path

import httpx
import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeFQE:
    """
    In-memory stand-in for the FQE site, served through httpx.MockTransport.

    search_page: HTML returned by the member search
    ratings:     {(member_id, code): body}; a str body is sent raw,
                 anything else is JSON-encoded. Missing keys return "null".
    fail_rating_codes: time-control codes whose request raises ConnectError
    """

    def __init__(self):
        self.search_page = ""
        self.ratings = {}
        self.fail_rating_codes = set()
        self.fail_search = False
        self.requests: list[httpx.Request] = []

    @property
    def search_requests(self):
        return [r for r in self.requests if r.url.path == "/membres/list-membres.php"]

    @property
    def rating_requests(self):
        return [r for r in self.requests if r.url.path == "/membres/json-cote.php"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == "/membres/list-membres.php":
            if self.fail_search:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, text=self.search_page)

        if request.url.path == "/membres/json-cote.php":
            member_id = int(request.url.params["id"])
            code = int(request.url.params["c"])
            if code in self.fail_rating_codes:
                raise httpx.ConnectError("connection refused", request=request)
            body = self.ratings.get((member_id, code), None)
            if isinstance(body, str):
                return httpx.Response(200, text=body)
            return httpx.Response(200, text=json.dumps(body))

        return httpx.Response(404, text="not found")


@pytest.fixture
def fake_fqe():
    return FakeFQE()


@pytest.fixture
async def fqe_client(fake_fqe):
    async with httpx.AsyncClient(
        base_url="https://fqe.test",
        transport=httpx.MockTransport(fake_fqe.handler),
    ) as client:
        yield client


@pytest.fixture
def member_page():
    """Build a search results page from (id, name) pairs."""
    def _page(*members):
        rows = "\n".join(
            f'<tr><td><a href="index.php?Id={member_id}">{name}</a></td></tr>'
            for member_id, name in members
        )
        return f"<html><body><table>{rows}</table></body></html>"
    return _page
