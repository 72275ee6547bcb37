"""
Error taxonomy for bracket operations.

ValidationError     - bad user input, nothing was written, safe to retry.
PersistenceError    - the match store could not be read or written.
PartialUpdateError  - a multi-step operation stopped after some writes landed.
DataIntegrityError  - the stored bracket is empty or missing an expected match;
                      callers fall back to the setup/generation flow.
ConfigurationError  - server-side settings are invalid.
"""
from typing import List, Optional


class BracketError(Exception):
    """Base class for all bracket errors."""


class ValidationError(BracketError):
    pass


class PersistenceError(BracketError):
    pass


class PartialUpdateError(PersistenceError):
    """
    Raised when a saga fails part-way through.

    Every step writes absolute values, so re-running the whole operation
    is the recovery path.
    """

    def __init__(self, action: str, completed: List[str], failed: str, cause: Optional[Exception] = None):
        self.action = action
        self.completed = list(completed)
        self.failed = failed
        self.cause = cause
        done = ', '.join(self.completed) if self.completed else 'none'
        super().__init__(
            f"{action} stopped at step '{failed}' (completed: {done}): {cause}. "
            f"Re-run the operation to finish it."
        )


class DataIntegrityError(BracketError):
    pass


class ConfigurationError(BracketError):
    """settings.yaml or the environment holds an unusable value."""
