"""
Shared fixtures building GitHub GraphQL payloads.
"""

import json
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from config import Settings


def _connection(nodes: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"edges": [{"node": node} for node in nodes]}


@pytest.fixture
def make_pr_node() -> Callable[..., Dict[str, Any]]:
    """Factory for a GraphQL pull request node."""

    def _make(
        title: Optional[str] = "Fix bug",
        body: Optional[str] = "desc",
        comments: int = 1,
        reviews: int = 0,
        files: int = 1,
    ) -> Dict[str, Any]:
        return {
            "title": title,
            "body": body,
            "comments": _connection(
                [
                    {"body": f"comment {i}", "author": {"login": f"commenter{i}"}}
                    for i in range(comments)
                ]
            ),
            "reviews": _connection(
                [
                    {
                        "state": "APPROVED",
                        "body": f"review {i}",
                        "author": {"login": f"reviewer{i}"},
                    }
                    for i in range(reviews)
                ]
            ),
            "files": _connection(
                [
                    {
                        "path": f"src/file_{i}.py",
                        "additions": i + 1,
                        "deletions": i,
                        "changeType": "MODIFIED",
                    }
                    for i in range(files)
                ]
            ),
        }

    return _make


@pytest.fixture
def make_page() -> Callable[..., Dict[str, Any]]:
    """Factory for a GraphQL response carrying one pull request page."""

    def _make(
        nodes: List[Dict[str, Any]],
        end_cursor: Optional[str] = None,
        has_next_page: bool = False,
    ) -> Dict[str, Any]:
        return {
            "data": {
                "rateLimit": {
                    "limit": 5000,
                    "cost": 1,
                    "remaining": 4999,
                    "resetAt": "2024-01-01T00:00:00Z",
                },
                "repository": {
                    "pullRequests": {
                        "edges": [{"node": node} for node in nodes],
                        "pageInfo": {
                            "endCursor": end_cursor,
                            "hasNextPage": has_next_page,
                        },
                    }
                },
            }
        }

    return _make


class RecordingTransport(httpx.MockTransport):
    """Mock transport serving canned responses in order and recording requests."""

    def __init__(self, responses: List[httpx.Response]):
        self.responses = list(responses)
        self.requests: List[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError("Unexpected extra request")
        return self.responses.pop(0)

    @property
    def variables(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content)["variables"] for r in self.requests]


@pytest.fixture
def transport_factory() -> Callable[..., RecordingTransport]:
    """Factory for a transport answering with the given JSON payloads."""

    def _make(*payloads: Any, status_code: int = 200) -> RecordingTransport:
        return RecordingTransport(
            [httpx.Response(status_code, json=payload) for payload in payloads]
        )

    return _make


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings writing into a temporary directory and ignoring .env files."""
    return Settings(
        _env_file=None,
        github_token=None,
        base_dir=str(tmp_path),
        log_dir=str(tmp_path / "logs"),
    )
