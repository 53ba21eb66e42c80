# gsearch/core/search_logic.py

"""Name and path search over a loaded database."""
from typing import Callable, Iterable, List, Sequence

from gsearch.core.data_structures import Entry, Folder, SearchOptions, SearchResult
from gsearch.core.matcher import QueryMatcher
from gsearch.core.path_resolver import PathResolver


class SearchEngine:
    """Runs QueryMatcher over the folder and file lists of a database."""

    def __init__(self, folders: Sequence[Folder], files: Sequence[Entry], resolver: PathResolver):
        self.folders = folders
        self.files = files
        self.resolver = resolver

    def search(self, options: SearchOptions) -> SearchResult:
        """
        Matches the query against bare entry names.

        Files are scanned before folders and `max_results` bounds the
        combined count, so a limit reached among the files leaves no room
        for folders.
        """
        result = SearchResult(files=[], folders=[])
        if not options.query:
            return result

        matcher = QueryMatcher(options.query, options.case_sensitive, options.match_whole_word)
        limit = max(options.max_results, 0)

        if options.search_files:
            _collect(self.files, lambda entry: matcher(entry.name), result.files, result, limit)
        if options.search_folders:
            _collect(self.folders, lambda entry: matcher(entry.name), result.folders, result, limit)

        return result

    def search_by_path(self, pattern: str, case_sensitive: bool = False) -> SearchResult:
        """Matches `pattern` against the full path of every file and folder."""
        result = SearchResult(files=[], folders=[])
        if not pattern:
            return result

        matcher = QueryMatcher(pattern, case_sensitive)
        full_path = self.resolver.full_path

        _collect(self.files, lambda entry: matcher(full_path(entry)), result.files, result, 0)
        _collect(self.folders, lambda entry: matcher(full_path(entry)), result.folders, result, 0)
        return result


def _collect(entries: Iterable[Entry], predicate: Callable[[Entry], bool],
             into: List, result: SearchResult, limit: int):
    for entry in entries:
        if limit and result.total >= limit:
            break
        if predicate(entry):
            into.append(entry)
