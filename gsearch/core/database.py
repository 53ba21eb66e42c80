# gsearch/core/database.py

"""The loaded database and the FSDB loader."""
import sys
from pathlib import Path
from typing import List, Optional, Union

from gsearch.core.data_structures import (
    DatabaseHeader, DatabaseInfo, Entry, Folder, IndexFlags,
    SearchOptions, SearchResult, SortedArray, SortedArrays,
)
from gsearch.core.format_reader import read_exact, read_header
from gsearch.core.hierarchy import HierarchyBuilder
from gsearch.core.path_resolver import PathResolver
from gsearch.core.search_logic import SearchEngine


class Database:
    """
    An FSDB database decoded into memory.

    Folders and files are kept in file order; parents are folder indices.
    After construction nothing changes except the path cache, which is
    filled lazily and never needs invalidating.
    """

    def __init__(self, header: DatabaseHeader, folders: List[Folder], files: List[Entry],
                 sorted_arrays: Optional[SortedArrays] = None, path: Optional[Path] = None):
        self.header = header
        self.path = path
        self.folders = folders
        self.files = files
        self.sorted_arrays = sorted_arrays or {}
        self.resolver = PathResolver(self.folders)
        self.engine = SearchEngine(self.folders, self.files, self.resolver)

        for entry in self.folders:
            entry.bind(self.resolver)
        for entry in self.files:
            entry.bind(self.resolver)

    # --- Statistics ---

    @property
    def index_flags(self) -> IndexFlags:
        return self.header.index_flags

    @property
    def folder_count(self) -> int:
        return len(self.folders)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def total_entries(self) -> int:
        return self.folder_count + self.file_count

    @property
    def sorted_array_count(self) -> int:
        return len(self.sorted_arrays)

    def info(self) -> DatabaseInfo:
        return DatabaseInfo(
            path=self.path,
            version=f"{self.header.major_version}.{self.header.minor_version}",
            index_flags=int(self.index_flags),
            folder_count=self.folder_count,
            file_count=self.file_count,
            sorted_array_count=self.sorted_array_count,
        )

    # --- Lookups ---

    def parent_of(self, entry: Entry) -> Optional[Folder]:
        if entry.parent_index is None:
            return None
        return self.folders[entry.parent_index]

    def full_path(self, entry: Entry) -> str:
        return self.resolver.full_path(entry)

    def sorted_array(self, array_id: int) -> Optional[SortedArray]:
        return self.sorted_arrays.get(array_id)

    # --- Search ---

    def search(self, query: str, case_sensitive: bool = False, whole_word: bool = False,
               search_files: bool = True, search_folders: bool = True,
               max_results: int = 0) -> SearchResult:
        """Search entry names. Never raises; an empty query finds nothing."""
        return self.engine.search(SearchOptions(
            query=query,
            case_sensitive=case_sensitive,
            match_whole_word=whole_word,
            search_files=search_files,
            search_folders=search_folders,
            max_results=max_results,
        ))

    def search_by_path(self, pattern: str, case_sensitive: bool = False) -> SearchResult:
        """Search full paths of files and folders."""
        return self.engine.search_by_path(pattern, case_sensitive)


def load(db_path: Union[str, Path], verbose: bool = False, progress: bool = False) -> Database:
    """
    Loads an FSDB file in one sequential pass.

    Raises OSError if the file can't be opened or read, and a FormatError
    subclass if its contents are invalid. Nothing is partially loaded.
    """
    db_path = Path(db_path)

    def log(message: str):
        if verbose:
            print(f"[FSDB] {message}", file=sys.stderr)

    log(f"Loading database: {db_path}")
    with db_path.open('rb') as buffer:
        header = read_header(buffer)
        log(f"Version {header.major_version}.{header.minor_version}, "
            f"index flags {int(header.index_flags):#x}")
        log(f"Folders: {header.folder_count} ({header.folder_block_size} bytes), "
            f"files: {header.file_count} ({header.file_block_size} bytes)")

        builder = HierarchyBuilder(header, progress=progress)
        folders = builder.read_folders(read_exact(buffer, header.folder_block_size, 'folder block'))
        log(f"Decoded {len(folders)} folders")
        files = builder.read_files(read_exact(buffer, header.file_block_size, 'file block'))
        log(f"Decoded {len(files)} files")
        sorted_arrays = builder.read_sorted_arrays(buffer)
        log(f"Read {len(sorted_arrays)} sorted arrays")

    return Database(header, folders, files, sorted_arrays, path=db_path)
