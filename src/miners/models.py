"""
Repository Mining Data Models.

Defines the raw data models returned by the GitHub GraphQL miner. Nested
`edges[].node` connections are flattened into plain lists on construction.
Uses Pydantic for validation and serialization.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from analyzers.models import ChangeType, ReviewState


class RepoIdentifier(BaseModel):
    """Owner and name of a GitHub repository."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    name: str = Field(min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


def _author_login(node: Dict[str, Any]) -> Optional[str]:
    # Deleted accounts come back with a null author
    author = node.get("author") or {}
    return author.get("login")


def _nodes(connection: Optional[Dict[str, Any]]) -> List[Dict[str, Any]]:
    if not connection:
        return []
    # Edges are nullable in the schema
    return [
        edge["node"]
        for edge in connection.get("edges") or []
        if edge and edge.get("node")
    ]


class RawComment(BaseModel):
    """Raw issue comment on a pull request."""

    body: Optional[str] = None
    author: Optional[str] = None


class RawReview(BaseModel):
    """Raw pull request review."""

    state: ReviewState
    body: Optional[str] = None
    author: Optional[str] = None


class RawFileChange(BaseModel):
    """Raw changed file of a pull request."""

    path: str
    additions: int = Field(default=0, ge=0)
    deletions: int = Field(default=0, ge=0)
    change_type: ChangeType


class RawPullRequest(BaseModel):
    """Raw pull request node from repository."""

    title: Optional[str] = None
    body: Optional[str] = None
    comments: List[RawComment] = Field(default_factory=list)
    reviews: List[RawReview] = Field(default_factory=list)
    files: List[RawFileChange] = Field(default_factory=list)

    @classmethod
    def from_graphql(cls, node: Dict[str, Any]) -> "RawPullRequest":
        """Build a raw pull request from a GraphQL `pullRequests` node.

        Args:
            node (Dict[str, Any]): The node as returned by the API.

        Returns:
            RawPullRequest: Flattened pull request.
        """
        return cls(
            title=node.get("title"),
            body=node.get("body"),
            comments=[
                RawComment(body=c.get("body"), author=_author_login(c))
                for c in _nodes(node.get("comments"))
            ],
            reviews=[
                RawReview(
                    state=r["state"], body=r.get("body"), author=_author_login(r)
                )
                for r in _nodes(node.get("reviews"))
            ],
            files=[
                RawFileChange(
                    path=f["path"],
                    additions=f.get("additions") or 0,
                    deletions=f.get("deletions") or 0,
                    change_type=f["changeType"],
                )
                for f in _nodes(node.get("files"))
            ],
        )


class RateLimitStatus(BaseModel):
    """GraphQL rate limit snapshot reported alongside each page."""

    limit: int
    cost: int
    remaining: int
    reset_at: datetime

    @classmethod
    def from_graphql(cls, data: Optional[Dict[str, Any]]) -> Optional["RateLimitStatus"]:
        if not data:
            return None
        return cls(
            limit=data["limit"],
            cost=data["cost"],
            remaining=data["remaining"],
            reset_at=data["resetAt"],
        )


class PullRequestPage(BaseModel):
    """One page of the `pullRequests` connection."""

    nodes: List[Dict[str, Any]]
    end_cursor: Optional[str] = None
    has_next_page: bool = False
    rate_limit: Optional[RateLimitStatus] = None
