# gsearch/core/delta_names.py

"""Delta (shared-prefix) name decompression."""
from typing import Optional, Tuple

from gsearch.core.errors import TruncatedError

MAX_SUFFIX_LENGTH = 255


def read_delta_name(block: bytes, offset: int, previous: bytes,
                    record: Optional[int] = None) -> Tuple[bytes, int]:
    """
    Rebuilds one name from the delta record at `block[offset:]`.

    A record is a 1-byte shared-prefix length, a 1-byte suffix length and
    the suffix bytes. The prefix is taken from `previous`, the full name of
    the record before it in the same block. A prefix length beyond the
    previous name keeps the whole previous name; producers rely on that.

    Returns the new name and the number of bytes consumed.
    """
    if offset + 2 > len(block):
        raise TruncatedError('name header', record)

    prefix_len = min(block[offset], len(previous))
    suffix_len = block[offset + 1]
    start = offset + 2
    end = start + suffix_len
    if end > len(block):
        raise TruncatedError('name data', record)

    return previous[:prefix_len] + block[start:end], 2 + suffix_len


def decode_name(raw: bytes) -> str:
    return raw.decode('utf-8', errors='replace')
