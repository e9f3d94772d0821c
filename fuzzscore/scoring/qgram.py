"""Distances fondées sur les q-grammes."""
import math
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

from fuzzscore.config import settings
from fuzzscore.scoring.base import ConfigurationError, Metric, qgrams


def qgram_profile(s: Sequence, q: int) -> Counter:
    """Compte les q-grammes de `s` (les listes sont converties en tuples)."""
    if isinstance(s, str):
        return Counter(qgrams(s, q))
    return Counter(tuple(x) for x in qgrams(s, q))


@dataclass(frozen=True)
class QGramDistance(Metric):
    """Base des distances q-grammes ; `q` est la taille des fenêtres."""

    q: int = field(default_factory=lambda: settings.DEFAULT_QGRAM_SIZE)

    def __post_init__(self):
        if self.q < 1:
            raise ConfigurationError(f"q doit être >= 1 (reçu {self.q})")

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> float:
        return self._from_profiles(qgram_profile(s1, self.q), qgram_profile(s2, self.q))

    def _from_profiles(self, p1: Counter, p2: Counter) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class QGram(QGramDistance):
    """Somme des écarts absolus de comptes de q-grammes (non bornée)."""

    def _from_profiles(self, p1: Counter, p2: Counter) -> int:
        return sum(abs(p1[k] - p2[k]) for k in p1.keys() | p2.keys())


def _degenerate(p1: Counter, p2: Counter) -> Optional[float]:
    """Profils vides : 0 si les deux le sont, 1 sinon ; None si rien à signaler."""
    if p1 and p2:
        return None
    return 0.0 if not p1 and not p2 else 1.0


@dataclass(frozen=True)
class Cosine(QGramDistance):
    """1 - cosinus entre vecteurs de comptes."""

    def _from_profiles(self, p1: Counter, p2: Counter) -> float:
        degenerate = _degenerate(p1, p2)
        if degenerate is not None:
            return degenerate
        if p1 == p2:
            return 0.0
        dot = sum(n * p2[k] for k, n in p1.items())
        norm1 = math.sqrt(sum(n * n for n in p1.values()))
        norm2 = math.sqrt(sum(n * n for n in p2.values()))
        # arrondi flottant : 1 - cos peut passer légèrement sous 0
        return max(0.0, 1.0 - dot / (norm1 * norm2))


@dataclass(frozen=True)
class Jaccard(QGramDistance):
    """1 - |A ∩ B| / |A ∪ B| sur les ensembles de q-grammes."""

    def _from_profiles(self, p1: Counter, p2: Counter) -> float:
        degenerate = _degenerate(p1, p2)
        if degenerate is not None:
            return degenerate
        a, b = p1.keys(), p2.keys()
        return 1.0 - len(a & b) / len(a | b)


@dataclass(frozen=True)
class SorensenDice(QGramDistance):
    """1 - 2|A ∩ B| / (|A| + |B|)."""

    def _from_profiles(self, p1: Counter, p2: Counter) -> float:
        degenerate = _degenerate(p1, p2)
        if degenerate is not None:
            return degenerate
        a, b = p1.keys(), p2.keys()
        return 1.0 - 2.0 * len(a & b) / (len(a) + len(b))


@dataclass(frozen=True)
class Overlap(QGramDistance):
    """1 - |A ∩ B| / min(|A|, |B|)."""

    def _from_profiles(self, p1: Counter, p2: Counter) -> float:
        degenerate = _degenerate(p1, p2)
        if degenerate is not None:
            return degenerate
        a, b = p1.keys(), p2.keys()
        return 1.0 - len(a & b) / min(len(a), len(b))
