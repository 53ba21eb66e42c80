# gsearch/core/hierarchy.py

"""Decoding of the folder and file blocks into entry lists."""
import struct
import sys
from typing import BinaryIO, List, Optional

from tqdm import tqdm

from gsearch.core.data_structures import (
    DatabaseHeader, Entry, Folder, IndexFlags, SortedArray, SortedArrays
)
from gsearch.core.delta_names import decode_name, read_delta_name
from gsearch.core.errors import (
    BlockSizeMismatchError, InvalidParentIndexError, TruncatedError
)
from gsearch.core.format_reader import read_exact, read_value

_U16 = struct.Struct('<H')
_U32 = struct.Struct('<I')
_I64 = struct.Struct('<q')


class HierarchyBuilder:
    """
    Turns the raw folder and file blocks into Folder and File lists.

    Records are decoded strictly in order: each name is a delta against
    the previous name of the same block, and each block starts its chain
    from an empty name.
    """

    def __init__(self, header: DatabaseHeader, progress: bool = False):
        self.header = header
        self.progress = progress
        self.has_size = header.has_flag(IndexFlags.SIZE)
        self.has_mtime = header.has_flag(IndexFlags.MODIFICATION_TIME)

    def read_folders(self, block: bytes) -> List[Folder]:
        folder_count = self.header.folder_count
        folders = []
        offset = 0
        previous = b''

        for i in self._records(folder_count, 'Folders'):
            # Reserved 2-byte field, unused by current producers.
            if offset + _U16.size > len(block):
                raise TruncatedError('folder reserved field', i)
            offset += _U16.size

            previous, consumed = read_delta_name(block, offset, previous, i)
            offset += consumed
            size, mtime, offset = self._read_optional_fields(block, offset, 'folder', i)

            parent = self._read_u32(block, offset, 'folder parent index', i)
            offset += _U32.size

            if parent == i:
                parent_index = None
            elif parent < folder_count:
                parent_index = parent
            else:
                raise InvalidParentIndexError(
                    f"folder parent index {parent} out of range (folders: {folder_count})", i)

            folders.append(Folder(decode_name(previous), i, parent_index, size, mtime))

        self._check_block_end('folder', offset, len(block))
        check_parent_cycles(folders)
        return folders

    def read_files(self, block: bytes) -> List[Entry]:
        folder_count = self.header.folder_count
        files = []
        offset = 0
        previous = b''

        for i in self._records(self.header.file_count, 'Files'):
            previous, consumed = read_delta_name(block, offset, previous, i)
            offset += consumed
            size, mtime, offset = self._read_optional_fields(block, offset, 'file', i)

            parent = self._read_u32(block, offset, 'file parent index', i)
            offset += _U32.size
            if parent >= folder_count:
                raise InvalidParentIndexError(
                    f"file parent index {parent} out of range (folders: {folder_count})", i)

            files.append(Entry(decode_name(previous), i, parent, size, mtime))

        self._check_block_end('file', offset, len(block))
        return files

    def read_sorted_arrays(self, buffer: BinaryIO) -> SortedArrays:
        """Reads the precomputed sort permutations that follow the file block."""
        sorted_arrays = {}
        count = read_value(buffer, '<I', 'sorted array count')
        folder_fmt = f'<{self.header.folder_count}I'
        file_fmt = f'<{self.header.file_count}I'

        for i in range(count):
            array_id = read_value(buffer, '<I', 'sorted array id')
            folders = struct.unpack(folder_fmt, read_exact(
                buffer, struct.calcsize(folder_fmt), f'folder indices of sorted array {array_id}'))
            files = struct.unpack(file_fmt, read_exact(
                buffer, struct.calcsize(file_fmt), f'file indices of sorted array {array_id}'))
            sorted_arrays[array_id] = SortedArray(array_id, folders, files)

        return sorted_arrays

    def _records(self, count: int, desc: str):
        return tqdm(range(count), desc=desc, unit='entry', file=sys.stderr,
                    disable=not self.progress, leave=False)

    def _read_optional_fields(self, block: bytes, offset: int, kind: str, record: int):
        size = mtime = 0
        if self.has_size:
            if offset + _I64.size > len(block):
                raise TruncatedError(f'{kind} size', record)
            size = _I64.unpack_from(block, offset)[0]
            offset += _I64.size
        if self.has_mtime:
            if offset + _I64.size > len(block):
                raise TruncatedError(f'{kind} modification time', record)
            mtime = _I64.unpack_from(block, offset)[0]
            offset += _I64.size
        return size, mtime, offset

    @staticmethod
    def _read_u32(block: bytes, offset: int, field: str, record: int) -> int:
        if offset + _U32.size > len(block):
            raise TruncatedError(field, record)
        return _U32.unpack_from(block, offset)[0]

    @staticmethod
    def _check_block_end(kind: str, offset: int, block_size: int):
        if offset != block_size:
            raise BlockSizeMismatchError(
                f"{kind} block size mismatch: read {offset} bytes, expected {block_size}")


def check_parent_cycles(folders: List[Folder]):
    """Raises InvalidParentIndexError if following parents from any folder loops."""
    # 0 = unvisited, 1 = on the current walk, 2 = known to reach a root
    state = [0] * len(folders)
    for start in range(len(folders)):
        walk = []
        current: Optional[int] = start
        while current is not None and state[current] == 0:
            state[current] = 1
            walk.append(current)
            current = folders[current].parent_index
        if current is not None and state[current] == 1:
            raise InvalidParentIndexError("folder parent links form a cycle", current)
        for index in walk:
            state[index] = 2
