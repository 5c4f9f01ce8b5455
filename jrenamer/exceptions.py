"""
Custom exception hierarchy for the renamer.

Everything except a missing input list is scoped to a single file: the
orchestrator catches RenamerError per file and moves on to the next one.
"""


class RenamerError(Exception):
    """Base exception for all renamer errors."""
    pass


class NotAFileError(RenamerError):
    """Raised when a path has no filename component."""
    pass


class MetadataUnavailableError(RenamerError):
    """Raised when a file cannot be stat'ed (missing or inaccessible)."""
    pass


class ScriptNotFoundError(RenamerError):
    """Raised when a configured script does not exist at startup."""
    pass


class ScriptExecutionError(RenamerError):
    """Raised when a script cannot be launched or exits non-zero."""

    def __init__(self, script, message, returncode=None, stderr=""):
        super().__init__(message)
        self.script = script
        self.returncode = returncode
        self.stderr = stderr


class UnresolvedPlaceholderError(RenamerError):
    """Raised when a template references a fragment that was never set."""

    def __init__(self, key):
        super().__init__(f"Template references unknown fragment '{key}'")
        self.key = key


class RenameError(RenamerError):
    """Raised when the final rename cannot be performed."""
    pass
