"""
Errors raised by the profile store.

Every error carries a short diagnostic ``code`` and keeps the exception that
caused it in ``cause`` (and ``__cause__``), so it can be logged in full while
callers only branch on the error class.
"""

from typing import Optional


class ProfileStoreError(Exception):
    """Base class for profile store failures."""

    code = "store_failure"

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class LoadError(ProfileStoreError):
    """The profile could not be loaded."""

    code = "load_failure"


class AccessFailure(LoadError):
    """The configuration location or one of its values could not be read."""

    code = "access_failure"


class EncodingFailure(LoadError):
    """The stored face text is not valid UTF-8 before its first nul byte."""

    code = "encoding_failure"


class SaveError(ProfileStoreError):
    """The profile could not be opened for writing or staged."""

    code = "save_failure"


class CommitFailure(SaveError):
    """Both values were staged but the transaction failed to commit."""

    code = "commit_failure"


class InvalidProfileError(SaveError):
    """The profile cannot be encoded for storage; nothing was written."""

    code = "invalid_profile"
