"""
Pull request qualification.

A pull request is worth keeping when it carries human signal: a title, a
description and at least one comment or review.
"""

from miners.models import RawPullRequest


class QualificationFilter:
    """Predicate deciding which raw pull requests are retained."""

    def qualifies(self, pr: RawPullRequest) -> bool:
        """
        Check whether a pull request has enough human-authored signal.

        Comment and review counts are bounded by the query's per-PR limits.

        Args:
            pr (RawPullRequest): Raw pull request.

        Returns:
            bool: True if title and description are non-empty and there is at
                least one comment or review.
        """
        if not pr.title or not pr.body:
            return False
        return len(pr.comments) > 0 or len(pr.reviews) > 0
