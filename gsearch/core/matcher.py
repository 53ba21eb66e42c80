# gsearch/core/matcher.py

"""Query matching: substring, whole-word and wildcard."""
import re
from functools import lru_cache
from typing import List, Optional, Tuple

WILDCARD_CHARS = ('*', '?')


def has_wildcards(query: str) -> bool:
    return any(char in query for char in WILDCARD_CHARS)


def wildcard_to_regex(query: str) -> str:
    """Translates `*` and `?` to regex, escaping everything else literally."""
    parts = []
    for char in query:
        if char == '*':
            parts.append('.*')
        elif char == '?':
            parts.append('.')
        else:
            parts.append(re.escape(char))
    return ''.join(parts)


@lru_cache(maxsize=1024)
def compile_wildcard(query: str, case_sensitive: bool) -> Optional[re.Pattern]:
    """
    Compiled, cached pattern for a wildcard query, or None if it can't be compiled.

    Patterns are used with `fullmatch`, so they always cover the whole candidate.
    """
    flags = re.DOTALL
    if not case_sensitive:
        flags |= re.IGNORECASE
    try:
        return re.compile(wildcard_to_regex(query), flags)
    except re.error:
        return None


def is_word_char(char: str) -> bool:
    return char.isalpha() or char.isdigit() or char == '_'


def casefold_with_origins(text: str) -> Tuple[str, List[int]]:
    """Case-folded `text` plus, for each folded char, the index of the char it came from."""
    folded = []
    origins = []
    for i, char in enumerate(text):
        piece = char.casefold()
        folded.append(piece)
        origins.extend([i] * len(piece))
    return ''.join(folded), origins


def find_whole_word(text: str, query: str, fold: bool = False) -> bool:
    """
    True if `query` occurs in `text` bounded by string edges or non-word chars.

    With `fold`, `text` is case-folded before searching (`query` must already
    be folded). Boundaries are still judged on the original characters, since
    folding can expand one char into several (`İ` becomes `i` plus a combining dot).
    """
    haystack, origins = casefold_with_origins(text) if fold else (text, None)

    def original(pos: int) -> str:
        return text[origins[pos]] if origins is not None else text[pos]

    start = 0
    while True:
        pos = haystack.find(query, start)
        if pos == -1:
            return False
        end = pos + len(query)
        before_ok = pos == 0 or not is_word_char(original(pos - 1))
        after_ok = end == len(haystack) or not is_word_char(original(end))
        if before_ok and after_ok:
            return True
        start = pos + 1


class QueryMatcher:
    """
    A query bound to its matching options, reusable across candidates.

    A query containing `*` or `?` is a wildcard pattern over the whole
    candidate and takes precedence over whole-word mode. If the pattern
    can't be compiled the query is matched as a literal substring instead.
    Case-insensitive comparisons outside wildcard mode use full Unicode
    case folding.
    """

    def __init__(self, query: str, case_sensitive: bool = False, match_whole_word: bool = False):
        self.query = query
        self.case_sensitive = case_sensitive
        self.match_whole_word = match_whole_word
        self.is_wildcard = has_wildcards(query)
        self._pattern = compile_wildcard(query, case_sensitive) if self.is_wildcard else None
        self._needle = query if case_sensitive else query.casefold()

    def __call__(self, candidate: str) -> bool:
        if not self.query:
            return False

        if self._pattern is not None:
            return self._pattern.fullmatch(candidate) is not None

        if self.match_whole_word and not self.is_wildcard:
            return find_whole_word(candidate, self._needle, fold=not self.case_sensitive)
        if not self.case_sensitive:
            candidate = candidate.casefold()
        return self._needle in candidate


def matches(candidate: str, query: str, case_sensitive: bool = False,
            match_whole_word: bool = False) -> bool:
    return QueryMatcher(query, case_sensitive, match_whole_word)(candidate)
