"""
Abstract Base Class for Pull Request Miners.

Defines the interface for pull request mining implementations.
All miners (GitHub GraphQL, fixtures in tests, ...) should implement this interface.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from miners.models import RawPullRequest


class PullRequestMiner(ABC):
    """
    Abstract base class for pull request miners.

    Implementations should handle:
    - Authentication with the repository service
    - Pagination until the source is exhausted
    - Filtering pull requests through the qualification predicate
    """

    @abstractmethod
    async def fetch_all(
        self, owner: str, name: str, token: Optional[str] = None
    ) -> List[RawPullRequest]:
        """
        Retrieve every qualifying pull request of a repository.

        Args:
            owner (str): Repository owner
            name (str): Repository name
            token (Optional[str]): Bearer token

        Returns:
            List[RawPullRequest]: Qualifying pull requests in source order

        Raises:
            FetchFailedError: If any page cannot be retrieved
        """
        pass
