"""
GitHub Pull Request Mining Module.

This module retrieves pull requests through the GitHub GraphQL API, following
the `pullRequests` connection cursor until GitHub reports no further pages.
Each page is filtered through the qualification predicate before it is
accumulated, so only pull requests worth persisting are returned.
"""

from typing import Any, Dict, List, Optional

import httpx

from config import logger
from exceptions import FetchFailedError
from analyzers.qualification import QualificationFilter
from miners.base import PullRequestMiner
from miners.models import PullRequestPage, RateLimitStatus, RawPullRequest

PR_QUERY = """
query (
  $owner: String!
  $name: String!
  $cursor: String
  $prPageSize: Int!
  $commentLimit: Int!
  $reviewLimit: Int!
  $fileLimit: Int!
) {
  rateLimit {
    limit
    cost
    remaining
    resetAt
  }
  repository(owner: $owner, name: $name) {
    pullRequests(first: $prPageSize, after: $cursor) {
      edges {
        node {
          title
          body
          comments(first: $commentLimit) {
            edges {
              node {
                body
                author {
                  login
                }
              }
            }
          }
          reviews(first: $reviewLimit) {
            edges {
              node {
                state
                body
                author {
                  login
                }
              }
            }
          }
          files(first: $fileLimit) {
            edges {
              node {
                path
                additions
                deletions
                changeType
              }
            }
          }
        }
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
"""


class GitHubGraphQLMiner(PullRequestMiner):
    """
    GitHubGraphQLMiner pages through a repository's pull requests and keeps
    the ones accepted by the qualification filter.
    """

    def __init__(
        self,
        qualification_filter: QualificationFilter,
        graphql_url: str = "https://api.github.com/graphql",
        pr_page_size: int = 100,
        comment_limit: int = 5,
        review_limit: int = 5,
        file_limit: int = 10,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the GraphQL miner.

        Args:
            qualification_filter (QualificationFilter): Predicate applied per page.
            graphql_url (str): GraphQL endpoint.
            pr_page_size (int): Pull requests per page.
            comment_limit (int): Comments requested per pull request.
            review_limit (int): Reviews requested per pull request.
            file_limit (int): Changed files requested per pull request.
            timeout (float): HTTP timeout in seconds.
            transport (Optional[httpx.AsyncBaseTransport]): Custom transport,
                used by tests to serve canned pages.
        """
        self.qualification_filter = qualification_filter
        self.graphql_url = graphql_url
        self.pr_page_size = pr_page_size
        self.comment_limit = comment_limit
        self.review_limit = review_limit
        self.file_limit = file_limit
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "GitHubGraphQLMiner":
        """Build a miner from application settings."""
        return cls(
            QualificationFilter(),
            graphql_url=settings.github_graphql_url,
            pr_page_size=settings.pr_page_size,
            comment_limit=settings.comment_limit,
            review_limit=settings.review_limit,
            file_limit=settings.file_limit,
            timeout=settings.request_timeout,
            **kwargs,
        )

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def _variables(self, owner: str, name: str, cursor: Optional[str]) -> Dict[str, Any]:
        return {
            "owner": owner,
            "name": name,
            "cursor": cursor,
            "prPageSize": self.pr_page_size,
            "commentLimit": self.comment_limit,
            "reviewLimit": self.review_limit,
            "fileLimit": self.file_limit,
        }

    def _log_rate_limit(self, rate_limit: Optional[RateLimitStatus], repo: str) -> None:
        """
        Log the GraphQL rate limit status reported with a page.

        Args:
            rate_limit (Optional[RateLimitStatus]): Rate limit snapshot.
            repo (str): Repository being mined.
        """
        if rate_limit is None:
            return

        logger.debug(
            {
                "message": "GraphQL API rate limit status",
                "repository": repo,
                "cost": rate_limit.cost,
                "remaining_points": rate_limit.remaining,
                "total_points": rate_limit.limit,
                "reset_time": rate_limit.reset_at.isoformat(),
            }
        )

        # If less than 10% of rate limit remains, log a warning
        if rate_limit.remaining < rate_limit.limit * 0.1:
            logger.warning(
                {
                    "message": "GitHub API rate limit running low",
                    "repository": repo,
                    "remaining_points": rate_limit.remaining,
                    "reset_time": rate_limit.reset_at.isoformat(),
                }
            )

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        owner: str,
        name: str,
        cursor: Optional[str],
    ) -> PullRequestPage:
        """
        Request one page of pull requests.

        Raises:
            FetchFailedError: On transport, HTTP status or GraphQL errors, or when
                the repository is not visible, or when the payload does not
                have the expected shape.
        """
        try:
            response = await client.post(
                self.graphql_url,
                json={
                    "query": PR_QUERY,
                    "variables": self._variables(owner, name, cursor),
                },
            )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchFailedError(
                f"Request failed with status code {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise FetchFailedError(str(e) or type(e).__name__) from e
        except ValueError as e:
            raise FetchFailedError(f"Invalid JSON response: {e}") from e

        if not isinstance(payload, dict):
            raise FetchFailedError(
                f"Unexpected response shape: expected an object, got {type(payload).__name__}"
            )

        try:
            return self._parse_page(payload)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise FetchFailedError(f"Unexpected response shape: {e!r}") from e

    def _parse_page(self, payload: Dict[str, Any]) -> PullRequestPage:
        errors = payload.get("errors")
        if errors:
            logger.error({"message": "GraphQL errors", "errors": errors})
            raise FetchFailedError(f"GraphQL Error: {errors[0].get('message')}")

        data = payload.get("data") or {}
        repository = data.get("repository")
        if not repository:
            raise FetchFailedError("Repository not found or access denied.")

        connection = repository.get("pullRequests") or {}
        page_info = connection.get("pageInfo") or {}
        return PullRequestPage(
            nodes=[edge.get("node") or {} for edge in connection.get("edges") or []],
            end_cursor=page_info.get("endCursor"),
            has_next_page=bool(page_info.get("hasNextPage")),
            rate_limit=RateLimitStatus.from_graphql(data.get("rateLimit")),
        )

    async def fetch_all(
        self, owner: str, name: str, token: Optional[str] = None
    ) -> List[RawPullRequest]:
        """
        Page through all pull requests of a repository.

        Args:
            owner (str): Repository owner.
            name (str): Repository name.
            token (Optional[str]): Bearer token; omitted from headers when empty.

        Returns:
            List[RawPullRequest]: Qualifying pull requests, in page order.

        Raises:
            FetchFailedError: If any page fails. Nothing accumulated so far is returned.
        """
        repo = f"{owner}/{name}"
        logger.info({"message": "Starting pull request mining", "repository": repo})

        cursor: Optional[str] = None
        pages = 0
        prs: List[RawPullRequest] = []

        try:
            async with httpx.AsyncClient(
                headers=self._headers(token),
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                while True:
                    logger.debug(
                        {
                            "message": "Fetching pull request page",
                            "repository": repo,
                            "cursor": cursor,
                        }
                    )
                    page = await self._fetch_page(client, owner, name, cursor)
                    pages += 1
                    self._log_rate_limit(page.rate_limit, repo)

                    try:
                        page_prs = [RawPullRequest.from_graphql(n) for n in page.nodes]
                    except (AttributeError, KeyError, TypeError, ValueError) as e:
                        raise FetchFailedError(f"Unexpected pull request shape: {e}") from e

                    prs.extend(
                        pr for pr in page_prs if self.qualification_filter.qualifies(pr)
                    )

                    if not page.has_next_page:
                        break
                    if not page.end_cursor:
                        raise FetchFailedError("Missing end cursor for next page")
                    cursor = page.end_cursor

        except FetchFailedError as e:
            logger.error(
                {
                    "message": "Pull request mining failed",
                    "repository": repo,
                    "pages_fetched": pages,
                    "error": e.message,
                }
            )
            raise

        logger.info(
            {
                "message": "Pull request mining finished",
                "repository": repo,
                "pages_fetched": pages,
                "qualified_prs": len(prs),
            }
        )
        return prs
