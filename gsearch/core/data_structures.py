"""Core data structures for the FSDB reader."""
from enum import IntFlag
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple

FOLDER = 'folder'
FILE = 'file'


class IndexFlags(IntFlag):
    """Which optional per-entry fields are stored in the database."""
    NAME = 1 << 0
    PATH = 1 << 1
    SIZE = 1 << 2
    MODIFICATION_TIME = 1 << 3
    ACCESS_TIME = 1 << 4
    CREATION_TIME = 1 << 5
    STATUS_CHANGE_TIME = 1 << 6


class Entry:
    """A file record. Folders extend it with reserved counters."""

    __slots__ = ('name', 'size', 'mtime', 'parent_index', 'index', 'kind', '_resolver')

    def __init__(self, name: str, index: int, parent_index: Optional[int] = None,
                 size: int = 0, mtime: int = 0, kind: str = FILE):
        self.name = name
        self.index = index
        self.parent_index = parent_index
        self.size = size
        self.mtime = mtime
        self.kind = kind
        self._resolver = None

    @property
    def key(self) -> Tuple[str, int]:
        """Identity of the entry within its database."""
        return (self.kind, self.index)

    def bind(self, resolver):
        self._resolver = resolver

    def full_path(self) -> str:
        """Slash-delimited path of this entry, computed by its database."""
        if self._resolver is None:
            raise RuntimeError(f"{self.kind} {self.name!r} is not attached to a database")
        return self._resolver.full_path(self)

    def __eq__(self, other):
        if not isinstance(other, Entry):
            return NotImplemented
        return (self.kind, self.index, self.name, self.parent_index, self.size, self.mtime) == \
               (other.kind, other.index, other.name, other.parent_index, other.size, other.mtime)

    def __hash__(self):
        return hash(self.key)

    def __repr__(self):
        return (f"{type(self).__name__}(name={self.name!r}, index={self.index}, "
                f"parent_index={self.parent_index}, size={self.size}, mtime={self.mtime})")


class Folder(Entry):
    """A folder record. `parent_index` is None for a root folder."""

    __slots__ = ('num_files', 'num_folders', 'db_index')

    def __init__(self, name: str, index: int, parent_index: Optional[int] = None,
                 size: int = 0, mtime: int = 0):
        super().__init__(name, index, parent_index, size, mtime, kind=FOLDER)
        # Reserved by the format, always zero today.
        self.num_files = 0
        self.num_folders = 0
        self.db_index = 0

    @property
    def is_root(self) -> bool:
        return self.parent_index is None


class SortedArray(NamedTuple):
    """Precomputed folder/file index permutations for one sort criterion."""
    id: int
    folders: Tuple[int, ...]
    files: Tuple[int, ...]


class DatabaseHeader(NamedTuple):
    """Fixed header and metadata of an FSDB file."""
    major_version: int
    minor_version: int
    index_flags: IndexFlags
    folder_count: int
    file_count: int
    folder_block_size: int
    file_block_size: int
    num_indexes: int = 0
    num_excludes: int = 0

    def has_flag(self, flag: IndexFlags) -> bool:
        return bool(self.index_flags & flag)


class DatabaseInfo(NamedTuple):
    """Summary of a loaded database."""
    path: Path
    version: str
    index_flags: int
    folder_count: int
    file_count: int
    sorted_array_count: int

    @property
    def total_entries(self) -> int:
        return self.folder_count + self.file_count


class SearchOptions(NamedTuple):
    """Holds the criteria for a name search."""
    query: str
    case_sensitive: bool = False
    match_whole_word: bool = False
    search_files: bool = True
    search_folders: bool = True
    max_results: int = 0


class SearchResult(NamedTuple):
    """Matching files and folders, each in storage order."""
    files: List[Entry]
    folders: List[Folder]

    @property
    def total(self) -> int:
        return len(self.files) + len(self.folders)


SortedArrays = Dict[int, SortedArray]
