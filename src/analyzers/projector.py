"""
Projection of raw GraphQL pull requests into the flat output records.
"""

from analyzers.models import Comment, FileChange, QualifiedPR, Review
from miners.models import RawPullRequest

# Login GitHub shows for deleted accounts
GHOST_AUTHOR = "ghost"


class PRRecordProjector:
    """Maps raw pull requests to `QualifiedPR` records, preserving order."""

    def project(self, pr: RawPullRequest) -> QualifiedPR:
        """
        Reshape a raw pull request into the output schema.

        Args:
            pr (RawPullRequest): Pull request that passed qualification.

        Returns:
            QualifiedPR: Flat record.
        """
        return QualifiedPR(
            title=pr.title or "",
            description=pr.body or "",
            comments=[
                Comment(body=c.body or "", author=c.author or GHOST_AUTHOR)
                for c in pr.comments
            ],
            reviews=[
                Review(
                    state=r.state,
                    body=r.body or "",
                    author=r.author or GHOST_AUTHOR,
                )
                for r in pr.reviews
            ],
            files=[
                FileChange(
                    path=f.path,
                    additions=f.additions,
                    deletions=f.deletions,
                    change_type=f.change_type,
                )
                for f in pr.files
            ],
        )
