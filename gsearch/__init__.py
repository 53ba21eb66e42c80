# gsearch
# Reader and search engine for FSDB filesystem index files

from .core.database import Database, load
from .core.data_structures import Entry, Folder, IndexFlags, SearchOptions, SearchResult
from .core.errors import FormatError
from .core.format_reader import load_metadata_only

__version__ = '1.0.0'

__all__ = ['Database', 'load', 'Entry', 'Folder', 'IndexFlags', 'SearchOptions',
           'SearchResult', 'FormatError', 'load_metadata_only']
