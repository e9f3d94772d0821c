"""Distances d'édition : Hamming, Levenshtein, Damerau-Levenshtein."""
import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence

import Levenshtein as lev

from fuzzscore.config import settings
from fuzzscore.scoring.base import Metric


def _cutoff(max_dist: Optional[float]) -> Optional[int]:
    """Borne entière équivalente : dist > max_dist <=> dist > floor(max_dist)."""
    if max_dist is None:
        return None
    return max(0, math.floor(max_dist))


@lru_cache(maxsize=settings.DISTANCE_CACHE_SIZE)
def _cached_levenshtein(s1: str, s2: str, cutoff: Optional[int]) -> int:
    # python-Levenshtein (implémentation C) renvoie cutoff + 1 si dépassé
    return lev.distance(s1, s2, score_cutoff=cutoff)


@dataclass(frozen=True)
class Hamming(Metric):
    """Nombre de positions différentes, plus l'écart de longueur."""

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> int:
        s1, s2 = (s1, s2) if len(s1) <= len(s2) else (s2, s1)
        return sum(1 for a, b in zip(s1, s2) if a != b) + len(s2) - len(s1)


@dataclass(frozen=True)
class Levenshtein(Metric):
    """Distance de Levenshtein (coûts unitaires)."""

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> int:
        """
        Calcule la distance de Levenshtein entre deux séquences.

        Args:
            s1: Première séquence
            s2: Deuxième séquence
            max_dist: Distance maximale (si dépassée, retourne floor(max_dist) + 1)

        Returns:
            Distance de Levenshtein
        """
        if not s1 or not s2:
            return max(len(s1), len(s2))

        cutoff = _cutoff(max_dist)
        if isinstance(s1, str) and isinstance(s2, str):
            return _cached_levenshtein(s1, s2, cutoff)
        return lev.distance(s1, s2, score_cutoff=cutoff)


@dataclass(frozen=True)
class DamerauLevenshtein(Metric):
    """Damerau-Levenshtein restreint (optimal string alignment)."""

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> int:
        cutoff = _cutoff(max_dist)
        len_a = len(s1)
        len_b = len(s2)
        if cutoff is not None and abs(len_a - len_b) > cutoff:
            return cutoff + 1

        d = [[0] * (len_b + 1) for _ in range(len_a + 1)]
        for i in range(len_a + 1):
            d[i][0] = i
        for j in range(len_b + 1):
            d[0][j] = j
        previous_min = 0
        for i in range(1, len_a + 1):
            for j in range(1, len_b + 1):
                cost = 0 if s1[i - 1] == s2[j - 1] else 1
                d[i][j] = min(
                    d[i - 1][j] + 1,
                    d[i][j - 1] + 1,
                    d[i - 1][j - 1] + cost,
                )
                if i > 1 and j > 1 and s1[i - 1] == s2[j - 2] and s1[i - 2] == s2[j - 1]:
                    d[i][j] = min(d[i][j], d[i - 2][j - 2] + cost)
            # Deux lignes consécutives au-dessus de la borne : plus rien ne redescend
            row_min = min(d[i])
            if cutoff is not None and row_min > cutoff and previous_min > cutoff:
                return cutoff + 1
            previous_min = row_min
        dist = d[len_a][len_b]
        if cutoff is not None and dist > cutoff:
            return cutoff + 1
        return dist
