# citenet/models/inputs.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple


def _clean(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    return tuple(v.strip() for v in (values or ()) if v and v.strip())


@dataclass(frozen=True)
class UserInputs:
    """
    Optional hints a user gives alongside the root paper.

    `references` are paper ids or free-text reference titles; ids that
    resolve become referenced papers in the network, and all of them are
    used as search phrases.
    """

    keywords: Tuple[str, ...] = field(default_factory=tuple)
    authors: Tuple[str, ...] = field(default_factory=tuple)
    references: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(
        cls,
        keywords: Optional[Iterable[str]] = None,
        authors: Optional[Iterable[str]] = None,
        references: Optional[Iterable[str]] = None,
    ) -> "UserInputs":
        return cls(
            keywords=_clean(keywords),
            authors=_clean(authors),
            references=_clean(references),
        )
