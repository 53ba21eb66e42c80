# gsearch/core/errors.py

"""Errors raised while decoding an FSDB database."""
from typing import Optional


class FormatError(Exception):
    """Base class for every structural problem found while loading a database."""

    def __init__(self, message: str, record: Optional[int] = None):
        self.record = record
        if record is not None:
            message = f"{message} (record {record})"
        super().__init__(message)


class BadMagicError(FormatError):
    pass


class UnsupportedMajorVersionError(FormatError):
    pass


class UnsupportedMinorVersionError(FormatError):
    pass


class TruncatedError(FormatError):
    """The file or a block ended while `field` was being read."""

    def __init__(self, field: str, record: Optional[int] = None):
        self.field = field
        super().__init__(f"unexpected end of data while reading {field}", record)


class InvalidParentIndexError(FormatError):
    pass


class BlockSizeMismatchError(FormatError):
    pass
