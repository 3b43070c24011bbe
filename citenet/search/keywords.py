# citenet/search/keywords.py

from __future__ import annotations

import re
from typing import Dict, List

from citenet.models.paper import Paper

_NON_WORD = re.compile(r"[^\w\s]")

STOP_WORDS = frozenset(
    """
    the a an and or but in on at to for of with by from as is are was were be
    been being have has had do does did will would should could may might must
    can this that these those it its they them their we our us i my me you your
    he she his her him
    """.split()
)


def _words(text: str, min_len: int) -> List[str]:
    return [w for w in _NON_WORD.sub(" ", text.lower()).split() if len(w) >= min_len]


def _text_keywords(text: str) -> List[str]:
    """
    Words plus bigrams/trigrams of at least 3-letter words.
    """
    words = _words(text, 3)
    phrases: List[str] = []
    for i in range(len(words) - 1):
        bigram = f"{words[i]} {words[i + 1]}"
        if len(bigram) >= 6:
            phrases.append(bigram)
        if i < len(words) - 2:
            trigram = f"{words[i]} {words[i + 1]} {words[i + 2]}"
            if len(trigram) >= 9:
                phrases.append(trigram)
    return words + phrases


def _title_ngrams(title: str) -> List[str]:
    words = _words(title, 2)
    grams = list(words)
    grams += [f"{words[i]} {words[i + 1]}" for i in range(len(words) - 1)]
    grams += [f"{words[i]} {words[i + 1]} {words[i + 2]}" for i in range(len(words) - 2)]
    return grams


def _author_keywords(paper: Paper) -> List[str]:
    out: List[str] = []
    for author in paper.author_list():
        parts = author.split()
        out.append(" ".join(parts))
        out.append(parts[0])
        if len(parts) > 1:
            out.append(parts[-1])
    return out


def extract_keywords(paper: Paper) -> List[str]:
    """
    Suggest search keywords from a paper's tldr, title, authors, fields of
    study and the start of its abstract.

    Lower-cased, first-occurrence order, stop words and anything shorter
    than three characters removed.
    """
    candidates: List[str] = []
    if paper.tldr:
        candidates += _text_keywords(paper.tldr)
    if paper.title:
        candidates += _title_ngrams(paper.title)
    candidates += _author_keywords(paper)
    for field_name in paper.fields_of_study:
        candidates += _text_keywords(field_name)
    if paper.abstract:
        candidates += _text_keywords(paper.abstract[:500])

    seen: Dict[str, None] = {}
    for kw in candidates:
        kw = kw.lower()
        if len(kw) >= 3 and kw not in STOP_WORDS:
            seen.setdefault(kw, None)
    return list(seen)
