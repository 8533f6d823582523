"""
HTTP routes of the harvester.
"""

from typing import Optional

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from api.schemas import ErrorResponse, FetchPRsRequest, FetchPRsResponse
from analyzers.collection import CollectionPipeline
from config import logger

router = APIRouter(tags=["Pull Requests"])


@router.get("/health")
async def health():
    return {"status": "ok"}


@router.post("/fetch-prs")
async def fetch_prs(request: Request, body: Optional[FetchPRsRequest] = None):
    """Collect the qualified pull requests of a repository and persist them."""
    # An absent body is treated like an empty one
    body = body or FetchPRsRequest()
    pipeline: CollectionPipeline = request.app.state.pipeline
    settings = pipeline.settings

    if settings.require_token:
        if not body.repo_url or not (body.token or settings.token):
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=ErrorResponse(
                    error="Repository URL and Token are required"
                ).model_dump(),
            )
    elif not body.repo_url:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ErrorResponse(error="Repository URL is required").model_dump(),
        )

    logger.info({"message": "fetch-prs request received", "repo_url": body.repo_url})
    result = await pipeline.collect(body.repo_url, body.token)

    response = FetchPRsResponse(
        file_path=str(result.file_path),
        prs=result.prs if settings.include_prs_in_response else None,
    )
    return response.model_dump(by_alias=True, exclude_none=True, mode="json")
