# medassist/domain/services/fuzzy_matcher.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from rapidfuzz import fuzz
from rapidfuzz.distance import Levenshtein

from medassist.domain.models import MedicationRecord

DEFAULT_THRESHOLD = 0.3     # max dissimilarity accepted (0 = identical, 1 = unrelated)
MIN_PARTIAL_LEN = 3         # shorter queries only score on the full name
LOCATION_DISTANCE = 100     # substring hits lose 1/100 per character from the start of the name


@dataclass(frozen=True)
class FuzzyHit:
    name: str
    score: float


def _norm(s: str) -> str:
    return " ".join((s or "").lower().split())


def _substring_score(q: str, n: str) -> float:
    # edit errors per query char inside the best window, plus how far in the window starts
    al = fuzz.partial_ratio_alignment(q, n)
    window = n[al.dest_start:al.dest_end]
    errors = Levenshtein.distance(q, window) / len(q)
    return errors + al.dest_start / LOCATION_DISTANCE


def dissimilarity(query: str, name: str) -> float:
    """
    Normalized edit-distance style score between a query and a catalog name.

    Best of:
      - full Indel dissimilarity (close misspellings, e.g. "paracetmol")
      - substring errors plus a location penalty, when the query fits inside
        the name (partial names, e.g. "amoxi" → "Amoxicillin")
    """
    q, n = _norm(query), _norm(name)
    if not q or not n:
        return 1.0
    score = 1.0 - fuzz.ratio(q, n) / 100.0
    if MIN_PARTIAL_LEN <= len(q) <= len(n):
        score = min(score, _substring_score(q, n))
    return round(min(score, 1.0), 4)


class FuzzyMatcher:
    """
    Approximate name search over an inventory snapshot.

    One pass over the catalog; hits are ordered by ascending score and keep
    catalog order on ties (sorted() is stable). Stock level is ignored.
    """

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self.threshold = threshold

    def search(self, query: str, catalog: Iterable[MedicationRecord]) -> List[FuzzyHit]:
        if not _norm(query):
            return []
        hits: List[FuzzyHit] = []
        for rec in catalog:
            score = dissimilarity(query, rec.name)
            if score <= self.threshold:
                hits.append(FuzzyHit(name=rec.name, score=score))
        return sorted(hits, key=lambda h: h.score)
