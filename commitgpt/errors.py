class CommitGptError(Exception):
    """Base exception for commitgpt errors."""


class SettingsError(CommitGptError):
    """Raised when the settings file is missing, unreadable or invalid."""


class GitDiffError(CommitGptError):
    """Raised when `git diff` exits with a non-zero status."""


class EmptyDiffError(CommitGptError):
    """Raised when there are no staged changes to describe."""

    def __init__(self, message: str = "there are no active changes, add them first to staging") -> None:
        super().__init__(message)


class EncodingError(CommitGptError):
    """Raised when the diff output is not valid UTF-8."""


class FetchDataError(CommitGptError):
    """Raised when the completion service answers with a non-success status.

    The raw response body is kept on ``body`` so it can be shown verbatim.
    """

    def __init__(self, body: str) -> None:
        super().__init__(f"couldn't fetch data, response from openai is not okay: {body}")
        self.body = body


class CompletionTimeoutError(CommitGptError):
    """Raised when the completion request exceeds its deadline."""


class MissingContentError(CommitGptError):
    """Raised when a returned choice carries no generated text."""


class GitCommitError(CommitGptError):
    """Raised when `git commit` exits with a non-zero status."""


class SelectionInconsistencyError(CommitGptError):
    """Raised when the picked index has no matching candidate."""
