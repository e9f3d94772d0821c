"""Distance de Ratcliff/Obershelp (Gestalt pattern matching)."""
from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import List, Optional, Sequence, Tuple

from fuzzscore.scoring.base import Metric


def matching_blocks(s1: Sequence, s2: Sequence) -> List[Tuple[int, int, int]]:
    """
    Décomposition récursive en plus longues sous-chaînes communes.

    Returns:
        Liste de (offset dans s1, offset dans s2, longueur), offsets à partir de 0,
        sans le bloc sentinelle de longueur nulle renvoyé par difflib.
    """
    # autojunk=False : pas d'heuristique « populaire » sur les longues séquences
    matcher = SequenceMatcher(None, s1, s2, autojunk=False)
    return [(a, b, size) for a, b, size in matcher.get_matching_blocks() if size > 0]


@dataclass(frozen=True)
class RatcliffObershelp(Metric):
    """1 - 2M / (len1 + len2), M étant le nombre de caractères appariés."""

    @property
    def is_normalized(self) -> bool:
        return True

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> float:
        total = len(s1) + len(s2)
        if total == 0:
            return 0.0
        matched = sum(size for _, _, size in matching_blocks(s1, s2))
        return 1.0 - 2.0 * matched / total
