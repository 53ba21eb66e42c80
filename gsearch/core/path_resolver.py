# gsearch/core/path_resolver.py

"""Full path computation with a shared memoization table."""
import threading
from typing import Dict, Hashable, List, Optional, Sequence

from gsearch.core.data_structures import Entry, Folder

ROOT_PATH = '/'


class PathCache:
    """Entry identity -> path store, safe for concurrent readers and writers."""

    def __init__(self):
        self._paths: Dict[Hashable, str] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[str]:
        return self._paths.get(key)

    def store(self, key: Hashable, path: str) -> str:
        # First writer wins so every caller sees the same string object.
        with self._lock:
            return self._paths.setdefault(key, path)

    def __len__(self):
        return len(self._paths)

    def __contains__(self, key):
        return key in self._paths


class PathResolver:
    """
    Computes slash-delimited paths by walking parent links.

    An uncached entry is resolved with one upward walk that stops at the
    first cached ancestor (or a root); every path computed on the way down
    is cached, so siblings reuse their parent's path.
    """

    def __init__(self, folders: Sequence[Folder], cache: Optional[PathCache] = None):
        self.folders = folders
        self.cache = cache if cache is not None else PathCache()

    def full_path(self, entry: Entry) -> str:
        cached = self.cache.get(entry.key)
        if cached is not None:
            return cached

        pending: List[Entry] = []
        prefix = None
        node = entry
        while node is not None:
            cached = self.cache.get(node.key)
            if cached is not None:
                prefix = cached
                break
            pending.append(node)
            node = self._parent_of(node)

        for node in reversed(pending):
            prefix = self.cache.store(node.key, join_path(prefix, node.name))
        return prefix

    def _parent_of(self, entry: Entry) -> Optional[Folder]:
        if entry.parent_index is None:
            return None
        return self.folders[entry.parent_index]


def join_path(parent_path: Optional[str], name: str) -> str:
    """Path of an entry named `name` below `parent_path` (None for a root)."""
    if parent_path is None:
        # A named root keeps its bare name, only an unnamed root is "/".
        return name if name else ROOT_PATH
    if parent_path == ROOT_PATH:
        return ROOT_PATH + name
    return f"{parent_path}/{name}"
