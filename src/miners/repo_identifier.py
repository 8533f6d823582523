"""
Repository identifier parsing.

Accepts either a GitHub URL (``https://github.com/<owner>/<name>[/...]``) or a
bare ``<owner>/<name>`` token. Extra path segments after the name are ignored.
"""

import re

from exceptions import InvalidIdentifierError
from miners.models import RepoIdentifier

_REPO_PATTERN = re.compile(r"^(?:https?://github\.com/)?([^/]+)/([^/]+)(?:/.*)?$")


def parse_repo_identifier(value: str) -> RepoIdentifier:
    """
    Extract owner and repository name from a URL or owner/name string.

    Args:
        value (str): Repository URL or ``owner/name``.

    Returns:
        RepoIdentifier: Parsed identifier.

    Raises:
        InvalidIdentifierError: If the value does not contain two path segments.
    """
    match = _REPO_PATTERN.match((value or "").strip())
    if not match:
        raise InvalidIdentifierError()

    owner, name = match.group(1), match.group(2)
    if name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise InvalidIdentifierError()

    return RepoIdentifier(owner=owner, name=name)
