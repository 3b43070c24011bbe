# tests/test_filters.py

import pytest

from citenet.errors import ValidationError
from citenet.search.filters import (
    FieldOfStudy,
    PublicationType,
    Quartile,
    SearchFilters,
)


def test_from_raw_accepts_comma_strings_and_camel_case():
    filters = SearchFilters.from_raw(
        {
            "fieldsOfStudy": "Computer Science, Physics",
            "minCitationCount": 10,
            "quartileRanking": ["Q1", "Q2"],
            "publicationTypes": "journal,book series",
            "openAccessPdf": True,
            "year": "2015:2020",
        }
    )

    assert filters.fields_of_study == (FieldOfStudy.COMPUTER_SCIENCE, FieldOfStudy.PHYSICS)
    assert filters.quartile_ranking == (Quartile.Q1, Quartile.Q2)
    assert filters.publication_types == (PublicationType.JOURNAL, PublicationType.BOOK_SERIES)
    assert filters.min_citation_count == 10
    assert filters.open_access_pdf is True


def test_to_query_params_omits_unset_filters():
    filters = SearchFilters.from_raw(
        {"fields_of_study": ["Medicine"], "year": "2020", "downloadable": False}
    )

    assert filters.to_query_params() == {
        "fieldsOfStudy": "Medicine",
        "downloadable": "false",
        "year": "2020",
    }
    assert SearchFilters().to_query_params() == {}


def test_invalid_enum_values_are_named():
    with pytest.raises(ValidationError) as excinfo:
        SearchFilters.from_raw({"fieldsOfStudy": "Computer Science,Alchemy"})

    assert "Alchemy" in str(excinfo.value)


@pytest.mark.parametrize(
    "raw",
    [
        {"year": "20"},
        {"year": "2020-2021"},
        {"year": 2020},
        {"minCitationCount": -1},
        {"minCitationCount": "10"},
        {"openAccessPdf": "yes"},
        {"quartileRanking": "Q5"},
    ],
)
def test_invalid_filters_raise(raw):
    with pytest.raises(ValidationError):
        SearchFilters.from_raw(raw)


def test_all_fields_of_study_are_known():
    assert len(FieldOfStudy) == 23
