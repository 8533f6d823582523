"""
HTTP request and response schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from analyzers.models import QualifiedPR


class FetchPRsRequest(BaseModel):
    """Body of ``POST /fetch-prs``. Presence is checked by the route."""

    repo_url: Optional[str] = Field(default=None, alias="repoUrl")
    token: Optional[str] = None


class FetchPRsResponse(BaseModel):
    message: str = "PRs fetched successfully"
    file_path: str = Field(serialization_alias="filePath")
    prs: Optional[List[QualifiedPR]] = None


class ErrorResponse(BaseModel):
    error: str
