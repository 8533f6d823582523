"""
Pull Request Storage Module.

This module persists the qualified pull requests of a repository as a JSON
document. Each run fully overwrites the previous document for the same
repository; no history is kept. Documents are written to a temporary file
and moved into place, so a failed write leaves the previous document intact.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from config import logger
from exceptions import FilesystemError
from analyzers.models import QualifiedPR
from miners.models import RepoIdentifier


class PRStore:
    """
    Manages the JSON documents holding qualified pull requests.
    """

    def __init__(self, base_dir: str, output_subdir: str = "fetched-prs"):
        """Initialize the pull request store.

        Args:
            base_dir (str): Base directory for output files.
            output_subdir (str): Folder under base_dir holding the documents.
        """
        self.storage_dir = Path(base_dir) / output_subdir

    def file_path(self, identifier: RepoIdentifier) -> Path:
        """Generate the document path for a repository.

        Args:
            identifier (RepoIdentifier): Repository identifier.

        Returns:
            Path: ``<storage_dir>/<owner>-<name>-prs.json``
        """
        return self.storage_dir / f"{identifier.owner}-{identifier.name}-prs.json"

    def save(self, identifier: RepoIdentifier, prs: List[QualifiedPR]) -> Path:
        """Write qualified pull requests, replacing any previous document.

        Args:
            identifier (RepoIdentifier): Repository identifier.
            prs (List[QualifiedPR]): Records to write.

        Returns:
            Path: Path of the written document.

        Raises:
            FilesystemError: If the directory or file cannot be written.
        """
        file_path = self.file_path(identifier)
        content = json.dumps(
            [pr.to_record() for pr in prs], indent=2, ensure_ascii=False
        )

        tmp_path: Optional[str] = None
        try:
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.storage_dir,
                prefix=f".{file_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_path = tmp.name
                tmp.write(content)
            os.replace(tmp_path, file_path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            logger.error(
                {
                    "message": "Failed to save pull requests",
                    "repository": identifier.full_name,
                    "error": str(e),
                }
            )
            raise FilesystemError(str(e)) from e

        logger.info(
            {
                "message": "Pull requests saved successfully",
                "repository": identifier.full_name,
                "file": str(file_path),
                "count": len(prs),
            }
        )
        return file_path

    def load(self, identifier: RepoIdentifier) -> Optional[List[QualifiedPR]]:
        """Load a previously written document.

        Args:
            identifier (RepoIdentifier): Repository identifier.

        Returns:
            Optional[List[QualifiedPR]]: Records, or None when no document exists.

        Raises:
            FilesystemError: If the document cannot be read or parsed.
        """
        file_path = self.file_path(identifier)
        if not file_path.exists():
            return None

        try:
            data = json.loads(file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.error(
                {
                    "message": "Failed to load pull requests",
                    "repository": identifier.full_name,
                    "file": str(file_path),
                    "error": str(e),
                }
            )
            raise FilesystemError(str(e)) from e

        return [QualifiedPR.model_validate(item) for item in data]
