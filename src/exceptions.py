"""
Harvester Exceptions.

Every failure that reaches the HTTP or CLI boundary is one of these; the
message is what the caller sees.
"""


class PRHarvesterError(Exception):
    """Base application exception."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class InvalidIdentifierError(PRHarvesterError):
    """Raised when a repository URL or owner/name string cannot be parsed."""

    def __init__(self, message: str = "Invalid repository URL"):
        super().__init__(message)


class FetchFailedError(PRHarvesterError):
    """Raised for transport, authorization, GraphQL or not-found failures."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Error fetching PRs: {reason}")


class FilesystemError(PRHarvesterError):
    """Raised when the output directory or file cannot be written."""
