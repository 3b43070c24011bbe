# citenet/models/paper.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

_AUTHOR_SPLIT = re.compile(r"[,;|&]")


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _as_optional_int(value: Any) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _as_optional_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Paper:
    """
    A paper as returned by the search provider.

    Read-only input to every builder; nothing in citenet mutates it.
    """

    id: str
    title: str
    authors: Optional[str] = None
    year: Optional[int] = None
    fields_of_study: Tuple[str, ...] = field(default_factory=tuple)

    citation_count: int = 0
    reference_count: int = 0
    influential_citation_count: int = 0
    score: Optional[float] = None

    tldr: Optional[str] = None
    abstract: Optional[str] = None
    publication_type: Optional[str] = None
    journal_name: Optional[str] = None
    doi: Optional[str] = None
    is_open_access: Optional[bool] = None
    downloadable: Optional[bool] = None

    def author_list(self) -> List[str]:
        """
        Split the free-text author string on the usual delimiters.
        """
        if not self.authors:
            return []
        return [a.strip() for a in _AUTHOR_SPLIT.split(self.authors) if a.strip()]

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "Paper":
        """
        Build a Paper from the provider's camelCase JSON shape.

        Tolerates missing keys and also accepts flat snake_case keys
        (citation_count, fields_of_study, ...).
        """
        impact = payload.get("impactFactor") or {}
        fields = payload.get("fieldsOfStudy", payload.get("fields_of_study")) or ()

        return cls(
            id=str(payload["id"]),
            title=str(payload.get("title") or ""),
            authors=payload.get("authors") or None,
            year=_as_optional_int(payload.get("year")),
            fields_of_study=tuple(str(f) for f in fields if f),
            citation_count=_as_int(
                impact.get("citationCount", payload.get("citation_count"))
            ),
            reference_count=_as_int(
                impact.get("referenceCount", payload.get("reference_count"))
            ),
            influential_citation_count=_as_int(
                impact.get(
                    "influentialCitationCount",
                    payload.get("influential_citation_count"),
                )
            ),
            score=_as_optional_float(payload.get("score")),
            tldr=payload.get("tldr"),
            abstract=payload.get("abstract"),
            publication_type=payload.get("publicationType", payload.get("publication_type")),
            journal_name=payload.get("journalName", payload.get("journal_name")),
            doi=payload.get("doi"),
            is_open_access=payload.get("isOpenAccess", payload.get("is_open_access")),
            downloadable=payload.get("downloadable"),
        )

    def to_api(self) -> Dict[str, Any]:
        """
        Serialize back into the provider's camelCase shape.
        """
        return {
            "id": self.id,
            "title": self.title,
            "authors": self.authors,
            "year": self.year,
            "fieldsOfStudy": list(self.fields_of_study),
            "impactFactor": {
                "citationCount": self.citation_count,
                "referenceCount": self.reference_count,
                "influentialCitationCount": self.influential_citation_count,
            },
            "score": self.score,
            "tldr": self.tldr,
            "abstract": self.abstract,
            "publicationType": self.publication_type,
            "journalName": self.journal_name,
            "doi": self.doi,
            "isOpenAccess": self.is_open_access,
            "downloadable": self.downloadable,
        }


@dataclass(frozen=True)
class PaperRef:
    """
    How a caller points at the root paper: by corpus id or, failing that, by title.
    """

    corpus_id: Optional[str] = None
    title: Optional[str] = None

    def __str__(self) -> str:
        return self.corpus_id or self.title or "<empty>"
