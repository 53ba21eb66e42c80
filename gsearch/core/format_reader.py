# gsearch/core/format_reader.py

"""FSDB header and metadata parsing."""
import io
import struct
from pathlib import Path
from typing import BinaryIO

from gsearch.core.data_structures import DatabaseHeader, IndexFlags
from gsearch.core.errors import (
    BadMagicError, TruncatedError,
    UnsupportedMajorVersionError, UnsupportedMinorVersionError,
)

MAGIC = b'FSDB'
MAJOR_VERSION = 0
MINOR_VERSION = 9

# Metadata fields following the magic and version bytes, in file order.
METADATA_FIELDS = (
    ('index flags', '<Q'),
    ('folder count', '<I'),
    ('file count', '<I'),
    ('folder block size', '<Q'),
    ('file block size', '<Q'),
    ('index count', '<I'),
    ('exclude count', '<I'),
)

HEADER_SIZE = 6 + sum(struct.calcsize(fmt) for _, fmt in METADATA_FIELDS)


def read_exact(buffer: BinaryIO, size: int, field: str) -> bytes:
    """Read exactly `size` bytes or raise TruncatedError naming `field`."""
    if buffer.seekable() and size > remaining_bytes(buffer):
        raise TruncatedError(field)
    data = buffer.read(size)
    if len(data) != size:
        raise TruncatedError(field)
    return data


def remaining_bytes(buffer: BinaryIO) -> int:
    position = buffer.tell()
    end = buffer.seek(0, io.SEEK_END)
    buffer.seek(position)
    return end - position


def read_value(buffer: BinaryIO, fmt: str, field: str) -> int:
    return struct.unpack(fmt, read_exact(buffer, struct.calcsize(fmt), field))[0]


def read_header(buffer: BinaryIO) -> DatabaseHeader:
    """
    Reads and validates the fixed header and metadata from `buffer`.

    Older minor versions are accepted since minor revisions only add data;
    the major version must match exactly.
    """
    magic = read_exact(buffer, 4, 'magic')
    if magic != MAGIC:
        raise BadMagicError(f"invalid magic number: got {magic!r}, expected {MAGIC!r}")

    major = read_value(buffer, '<B', 'major version')
    if major != MAJOR_VERSION:
        raise UnsupportedMajorVersionError(
            f"unsupported major version: got {major}, expected {MAJOR_VERSION}")

    minor = read_value(buffer, '<B', 'minor version')
    if minor > MINOR_VERSION:
        raise UnsupportedMinorVersionError(
            f"unsupported minor version: got {minor}, expected <= {MINOR_VERSION}")

    values = [read_value(buffer, fmt, field) for field, fmt in METADATA_FIELDS]
    flags, folders, files, folder_block, file_block, num_indexes, num_excludes = values

    # The two trailing counts are reserved; producers write zero but we don't insist.
    return DatabaseHeader(
        major_version=major,
        minor_version=minor,
        index_flags=IndexFlags(flags),
        folder_count=folders,
        file_count=files,
        folder_block_size=folder_block,
        file_block_size=file_block,
        num_indexes=num_indexes,
        num_excludes=num_excludes,
    )


def load_metadata_only(db_path: Path) -> DatabaseHeader:
    """Fast header extraction without decoding any entries."""
    with Path(db_path).open('rb') as buffer:
        return read_header(buffer)
