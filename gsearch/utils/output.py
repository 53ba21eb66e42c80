# gsearch/utils/output.py

"""Sorting and rendering of search results for the command line."""
import csv
import json
import sys
from typing import Dict, List, Optional, TextIO

from gsearch.core.data_structures import Entry, SearchResult
from gsearch.utils.file_utils import format_mtime, format_size
from gsearch.utils.i18n import translator as t

SORT_FIELDS = ('name', 'path', 'size', 'mtime')
OUTPUT_FORMATS = ('text', 'json', 'csv')
CSV_HEADER = ['name', 'path', 'type', 'size', 'mtime']


def sort_results(result: SearchResult, field: str) -> SearchResult:
    """Returns a copy of `result` with each collection sorted by `field`."""
    if field == 'name':
        file_key = folder_key = lambda e: e.name
    elif field == 'path':
        file_key = folder_key = lambda e: e.full_path()
    elif field == 'size':
        # Folder sizes aren't meaningful, order folders by name instead
        file_key, folder_key = (lambda e: e.size), (lambda e: e.name)
    elif field == 'mtime':
        file_key = folder_key = lambda e: e.mtime
    else:
        raise ValueError(f"Invalid sort field: {field}")

    return SearchResult(
        files=sorted(result.files, key=file_key),
        folders=sorted(result.folders, key=folder_key),
    )


def entry_to_dict(entry: Entry) -> Dict:
    return {
        'name': entry.name,
        'path': entry.full_path(),
        'type': entry.kind,
        'size': entry.size,
        'mtime': format_mtime(entry.mtime),
        'mtime_unix': entry.mtime,
    }


def result_rows(result: SearchResult) -> List[Dict]:
    """Folders first, then files, matching the text layout."""
    return [entry_to_dict(e) for e in result.folders] + [entry_to_dict(e) for e in result.files]


def print_text(result: SearchResult, out: TextIO):
    if not result.total:
        print(t.get('no_results'), file=out)
        return

    print(t.get('found_results', result.total), file=out)
    print(file=out)
    for folder in result.folders:
        print(f"[D] {folder.full_path()}", file=out)
    for file in result.files:
        line = f"[F] {file.full_path()}"
        if file.size > 0:
            line += f" ({format_size(file.size)})"
        print(line, file=out)


def print_json(result: SearchResult, out: TextIO):
    print(json.dumps(result_rows(result), indent=2, ensure_ascii=False), file=out)


def print_csv(result: SearchResult, out: TextIO):
    writer = csv.writer(out, lineterminator='\n')
    writer.writerow(CSV_HEADER)
    for row in result_rows(result):
        # Folder sizes are left blank
        size = row['size'] if row['type'] == 'file' else ''
        writer.writerow([row['name'], row['path'], row['type'], size, row['mtime']])


def print_results(result: SearchResult, output_format: str = 'text', out: Optional[TextIO] = None):
    """Render `result` as text, JSON or CSV."""
    out = out or sys.stdout
    if output_format == 'json':
        print_json(result, out)
    elif output_format == 'csv':
        print_csv(result, out)
    elif output_format == 'text':
        print_text(result, out)
    else:
        raise ValueError(f"Invalid output format: {output_format}")
