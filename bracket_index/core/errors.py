# errors.py - exceptions raised by the indexer


class BracketIndexError(Exception):
    """Base class for bracket_index errors."""


class FileAccessError(BracketIndexError):
    """The source file could not be opened or read. Nothing was indexed."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        msg = f"cannot open {path!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
