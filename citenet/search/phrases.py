# citenet/search/phrases.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from citenet.errors import InsufficientPhrases, ValidationError
from citenet.models.paper import Paper
from citenet.search.filters import JobType

MIN_PHRASES = 3
MAX_PHRASES = 10
MIN_QUERY_CHARS = 50
MAX_QUERY_CHARS = 5000


@dataclass(frozen=True)
class SearchRequest:
    phrases: Tuple[str, ...]
    query: Optional[str] = None

    @property
    def job_type(self) -> JobType:
        """
        Pick the provider job type the request can satisfy.
        """
        has_phrases = MIN_PHRASES <= len(self.phrases) <= MAX_PHRASES
        if has_phrases and self.query:
            return JobType.COMBINED_SEARCH
        if has_phrases:
            return JobType.KEYWORD_SEARCH
        return JobType.QUERY_SEARCH


class _PhraseSet:
    """
    Ordered, case-insensitively deduplicated phrase collection.
    """

    def __init__(self, limit: int = MAX_PHRASES) -> None:
        self.limit = limit
        self._items: List[str] = []
        self._seen: set = set()

    def add(self, phrase: Optional[str]) -> bool:
        text = (phrase or "").strip()
        if not text or len(self._items) >= self.limit:
            return False
        key = text.casefold()
        if key in self._seen:
            return False
        self._seen.add(key)
        self._items.append(text)
        return True

    def extend(self, phrases: Iterable[Optional[str]]) -> None:
        for phrase in phrases:
            self.add(phrase)

    def __len__(self) -> int:
        return len(self._items)

    def as_tuple(self) -> Tuple[str, ...]:
        return tuple(self._items)


def compose_query(
    paper: Paper,
    keywords: Sequence[str] = (),
    authors: Sequence[str] = (),
    references: Sequence[str] = (),
) -> str:
    parts = [f"Research related to {paper.title}"]
    if paper.fields_of_study:
        parts.append(f"in fields: {', '.join(paper.fields_of_study)}")
    if keywords:
        parts.append(f"focusing on keywords: {', '.join(keywords)}")
    if authors:
        parts.append(f"by authors: {', '.join(authors)}")
    if references:
        parts.append(f"related to references: {', '.join(references)}")
    return ". ".join(parts)


def normalize_query(query: Optional[str]) -> Optional[str]:
    """
    Trim and cap a query. Anything under MIN_QUERY_CHARS counts as no query.
    """
    text = (query or "").strip()
    if len(text) < MIN_QUERY_CHARS:
        return None
    if len(text) > MAX_QUERY_CHARS:
        text = text[: MAX_QUERY_CHARS - 3] + "..."
    return text


def build_phrases(
    paper: Paper,
    keywords: Optional[Sequence[str]] = None,
    authors: Optional[Sequence[str]] = None,
    references: Optional[Sequence[str]] = None,
    query: Optional[str] = None,
) -> SearchRequest:
    """
    Turn a root paper plus optional user hints into a provider search request.

    User keywords come first, then authors, then references; duplicates are
    dropped case-insensitively and the list is capped at MAX_PHRASES. With
    fewer than MIN_PHRASES, pad from the paper: title, fields of study,
    publication type.

    Raises InsufficientPhrases if padding cannot reach MIN_PHRASES.
    """
    keywords = [k.strip() for k in (keywords or []) if k and k.strip()]
    authors = [a.strip() for a in (authors or []) if a and a.strip()]
    references = [r.strip() for r in (references or []) if r and r.strip()]

    phrases = _PhraseSet()
    phrases.extend(keywords)
    phrases.extend(authors)
    phrases.extend(references)
    supplied = len(phrases)

    if len(phrases) < MIN_PHRASES:
        phrases.add(paper.title)
    for field_name in paper.fields_of_study:
        if len(phrases) >= MIN_PHRASES:
            break
        phrases.add(field_name)
    if len(phrases) < MIN_PHRASES:
        phrases.add(paper.publication_type)

    if len(phrases) < MIN_PHRASES:
        raise InsufficientPhrases(supplied=supplied, required=MIN_PHRASES)

    if query is None:
        query = compose_query(paper, keywords, authors, references)

    return SearchRequest(phrases=phrases.as_tuple(), query=normalize_query(query))


def validate_phrases(phrases: Sequence[str]) -> None:
    cleaned = [p for p in phrases if p and p.strip()]
    if not MIN_PHRASES <= len(cleaned) <= MAX_PHRASES:
        raise ValidationError(
            f"phrases must contain between {MIN_PHRASES} and {MAX_PHRASES} "
            f"non-empty entries, got {len(cleaned)}"
        )


def validate_query(query: str) -> None:
    if not MIN_QUERY_CHARS <= len(query) <= MAX_QUERY_CHARS:
        raise ValidationError(
            f"query must be {MIN_QUERY_CHARS}-{MAX_QUERY_CHARS} characters, "
            f"got {len(query)}"
        )
