# citenet/search/filters.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar

from citenet.errors import ValidationError

E = TypeVar("E", bound=Enum)

_YEAR_PATTERN = re.compile(r"^\d{4}(:\d{4})?$")


class JobType(str, Enum):
    KEYWORD_SEARCH = "keywordSearch"
    QUERY_SEARCH = "querySearch"
    COMBINED_SEARCH = "combinedSearch"


class FieldOfStudy(str, Enum):
    COMPUTER_SCIENCE = "Computer Science"
    MEDICINE = "Medicine"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    MATERIALS_SCIENCE = "Materials Science"
    PHYSICS = "Physics"
    GEOLOGY = "Geology"
    PSYCHOLOGY = "Psychology"
    ART = "Art"
    HISTORY = "History"
    GEOGRAPHY = "Geography"
    SOCIOLOGY = "Sociology"
    BUSINESS = "Business"
    POLITICAL_SCIENCE = "Political Science"
    ECONOMICS = "Economics"
    PHILOSOPHY = "Philosophy"
    MATHEMATICS = "Mathematics"
    ENGINEERING = "Engineering"
    ENVIRONMENTAL_SCIENCE = "Environmental Science"
    AGRICULTURAL_AND_FOOD_SCIENCES = "Agricultural and Food Sciences"
    EDUCATION = "Education"
    LAW = "Law"
    LINGUISTICS = "Linguistics"


class Quartile(str, Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"


class PublicationType(str, Enum):
    JOURNAL = "journal"
    BOOK_SERIES = "book series"
    CONFERENCE = "conference"


def _split(raw: Any) -> List[str]:
    """
    Accept a list of strings or a comma-separated string.
    """
    if raw is None:
        return []
    if isinstance(raw, str):
        items: Iterable[Any] = raw.split(",")
    else:
        items = raw
    return [str(item).strip() for item in items if str(item).strip()]


def _parse_enum_list(raw: Any, enum_cls: Type[E], name: str) -> Tuple[E, ...]:
    values = _split(raw)
    valid = {e.value: e for e in enum_cls}
    invalid = [v for v in values if v not in valid]
    if invalid:
        raise ValidationError(
            f"Invalid {name}: {', '.join(invalid)}. "
            f"Valid values: {', '.join(valid)}"
        )
    return tuple(valid[v] for v in values)


def _parse_optional_bool(raw: Any, name: str) -> Optional[bool]:
    if raw is None or isinstance(raw, bool):
        return raw
    raise ValidationError(f"{name} must be true or false")


@dataclass(frozen=True)
class SearchFilters:
    """
    Provider-side filters attached to a search job.
    """

    fields_of_study: Tuple[FieldOfStudy, ...] = field(default_factory=tuple)
    min_citation_count: Optional[int] = None
    open_access_pdf: Optional[bool] = None
    downloadable: Optional[bool] = None
    quartile_ranking: Tuple[Quartile, ...] = field(default_factory=tuple)
    publication_types: Tuple[PublicationType, ...] = field(default_factory=tuple)
    year: Optional[str] = None
    sort: Optional[str] = None

    def __post_init__(self) -> None:
        if self.min_citation_count is not None and (
            isinstance(self.min_citation_count, bool)
            or not isinstance(self.min_citation_count, int)
            or self.min_citation_count < 0
        ):
            raise ValidationError("min_citation_count must be a non-negative integer")
        if self.year is not None and (
            not isinstance(self.year, str) or not _YEAR_PATTERN.match(self.year)
        ):
            raise ValidationError("year must look like YYYY or YYYY:YYYY")

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "SearchFilters":
        """
        Validate loosely-typed request input (camelCase or snake_case keys).
        """
        raw = raw or {}

        def _get(*keys: str) -> Any:
            for key in keys:
                if raw.get(key) is not None:
                    return raw[key]
            return None

        return cls(
            fields_of_study=_parse_enum_list(
                _get("fieldsOfStudy", "fields_of_study"), FieldOfStudy, "fieldsOfStudy"
            ),
            min_citation_count=_get("minCitationCount", "min_citation_count"),
            open_access_pdf=_parse_optional_bool(
                _get("openAccessPdf", "open_access_pdf"), "openAccessPdf"
            ),
            downloadable=_parse_optional_bool(_get("downloadable"), "downloadable"),
            quartile_ranking=_parse_enum_list(
                _get("quartileRanking", "quartile_ranking"), Quartile, "quartileRanking"
            ),
            publication_types=_parse_enum_list(
                _get("publicationTypes", "publication_types"),
                PublicationType,
                "publicationTypes",
            ),
            year=_get("year"),
            sort=_get("sort"),
        )

    def to_query_params(self) -> Dict[str, str]:
        """
        Render as the provider's query-string parameters; unset filters are omitted.
        """
        params: Dict[str, str] = {}
        if self.fields_of_study:
            params["fieldsOfStudy"] = ",".join(f.value for f in self.fields_of_study)
        if self.min_citation_count:
            params["minCitationCount"] = str(self.min_citation_count)
        if self.open_access_pdf is not None:
            params["openAccessPdf"] = str(self.open_access_pdf).lower()
        if self.downloadable is not None:
            params["downloadable"] = str(self.downloadable).lower()
        if self.quartile_ranking:
            params["quartileRanking"] = ",".join(q.value for q in self.quartile_ranking)
        if self.publication_types:
            params["publicationTypes"] = ",".join(p.value for p in self.publication_types)
        if self.sort:
            params["sort"] = self.sort
        if self.year:
            params["year"] = self.year
        return params
