"""
Qualified Pull Request Models.

Defines the flat records written to the output document.
Uses Pydantic for validation and serialization.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ReviewState(Enum):
    """
    State of a pull request review.

    Attributes:
        APPROVED: Reviewer approved the changes
        CHANGES_REQUESTED: Reviewer asked for changes
        COMMENTED: Review with comments only
        DISMISSED: Review dismissed
        PENDING: Review not submitted yet
    """

    APPROVED = "APPROVED"
    CHANGES_REQUESTED = "CHANGES_REQUESTED"
    COMMENTED = "COMMENTED"
    DISMISSED = "DISMISSED"
    PENDING = "PENDING"


class ChangeType(Enum):
    """Kind of change applied to a file."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    RENAMED = "RENAMED"
    COPIED = "COPIED"
    # Part of GitHub's PatchStatus, reported for mode-only changes
    CHANGED = "CHANGED"


class Comment(BaseModel):
    """Comment on a qualified pull request."""

    model_config = ConfigDict(frozen=True)

    body: str
    author: str


class Review(BaseModel):
    """Review on a qualified pull request."""

    model_config = ConfigDict(frozen=True, use_enum_values=True)

    state: ReviewState
    body: str
    author: str


class FileChange(BaseModel):
    """Changed file of a qualified pull request."""

    model_config = ConfigDict(
        frozen=True, use_enum_values=True, populate_by_name=True
    )

    path: str
    additions: int = Field(ge=0)
    deletions: int = Field(ge=0)
    change_type: ChangeType = Field(alias="changeType")


class QualifiedPR(BaseModel):
    """Pull request that passed qualification, as persisted."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    comments: List[Comment]
    reviews: List[Review]
    files: List[FileChange]

    def to_record(self) -> dict:
        """Serializable dict using the output document's key names."""
        return self.model_dump(by_alias=True, mode="json")
