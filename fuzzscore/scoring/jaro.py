"""Distance de Jaro."""
from dataclasses import dataclass
from typing import Optional, Sequence

import Levenshtein as lev

from fuzzscore.scoring.base import Metric


@dataclass(frozen=True)
class Jaro(Metric):
    """1 - similarité de Jaro (python-Levenshtein)."""

    @property
    def is_normalized(self) -> bool:
        return True

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> float:
        if not s1 and not s2:
            return 0.0
        return 1.0 - lev.jaro(s1, s2)
