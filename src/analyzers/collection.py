"""
Pull Request Collection Module.

Orchestrates one fetch-filter-persist cycle for a single repository:

- Repository identifier parsing
- Paginated retrieval of qualifying pull requests
- Projection into flat records
- Persistence of the resulting JSON document

Either the whole sequence of qualified pull requests is produced and written,
or an error is raised and nothing is written.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel

from config import Settings, logger
from analyzers.models import QualifiedPR
from analyzers.projector import PRRecordProjector
from miners.base import PullRequestMiner
from miners.models import RepoIdentifier
from miners.repo_identifier import parse_repo_identifier
from storage.pr_store import PRStore


class CollectionResult(BaseModel):
    """Outcome of a persisted collection run."""

    identifier: RepoIdentifier
    file_path: Path
    prs: List[QualifiedPR]


class CollectionPipeline:
    """
    Coordinates parsing, mining, projection and storage for one repository.

    Attributes:
        settings (Settings): Application configuration.
        miner (PullRequestMiner): Source of qualifying raw pull requests.
        store (PRStore): Destination of the JSON document.
        projector (PRRecordProjector): Raw-to-record mapping.
    """

    def __init__(
        self,
        settings: Settings,
        miner: PullRequestMiner,
        store: PRStore,
        projector: Optional[PRRecordProjector] = None,
    ):
        self.settings = settings
        self.miner = miner
        self.store = store
        self.projector = projector or PRRecordProjector()

    def _resolve_token(self, token: Optional[str]) -> Optional[str]:
        return token or self.settings.token

    async def run(
        self, identifier_input: str, token: Optional[str] = None
    ) -> List[QualifiedPR]:
        """
        Fetch and project the qualified pull requests of a repository.

        Args:
            identifier_input (str): Repository URL or ``owner/name``.
            token (Optional[str]): Bearer token; falls back to the configured one.

        Returns:
            List[QualifiedPR]: Qualified pull requests in source order.

        Raises:
            InvalidIdentifierError: If the identifier cannot be parsed.
            FetchFailedError: If retrieval fails.
        """
        identifier = parse_repo_identifier(identifier_input)
        return await self._run(identifier, token)

    async def _run(
        self, identifier: RepoIdentifier, token: Optional[str]
    ) -> List[QualifiedPR]:
        raw_prs = await self.miner.fetch_all(
            identifier.owner, identifier.name, self._resolve_token(token)
        )
        return [self.projector.project(pr) for pr in raw_prs]

    async def collect(
        self, identifier_input: str, token: Optional[str] = None
    ) -> CollectionResult:
        """
        Run the pipeline and persist its output.

        Args:
            identifier_input (str): Repository URL or ``owner/name``.
            token (Optional[str]): Bearer token; falls back to the configured one.

        Returns:
            CollectionResult: Identifier, written path and records.

        Raises:
            InvalidIdentifierError: If the identifier cannot be parsed.
            FetchFailedError: If retrieval fails; no file is written.
            FilesystemError: If the document cannot be written.
        """
        identifier = parse_repo_identifier(identifier_input)
        logger.info(
            {"message": "Collecting pull requests", "repository": identifier.full_name}
        )

        prs = await self._run(identifier, token)
        file_path = self.store.save(identifier, prs)

        return CollectionResult(identifier=identifier, file_path=file_path, prs=prs)
