"""
Recherche séquentielle des meilleurs candidats dans une collection.

Les métriques sont immuables : un appelant peut paralléliser ces balayages
par lots sans synchronisation.
"""
import time
from typing import List, Optional, Sequence, Tuple

from fuzzscore.config import settings
from fuzzscore.logger import logger
from fuzzscore.scoring.base import Metric
from fuzzscore.scoring.modifiers import normalize


def find_best(
        query: Sequence,
        candidates: Sequence[Optional[Sequence]],
        metric: Metric,
        min_score: float = 0.0) -> Tuple[Optional[Sequence], Optional[int]]:
    """
    Trouve le candidat le plus similaire à `query`.

    La meilleure distance courante sert de borne `max_dist` aux évaluations
    suivantes, ce qui permet aux métriques internes de s'arrêter tôt.

    Args:
        query: Séquence recherchée
        candidates: Collection de candidats (les None sont ignorés)
        metric: Métrique de comparaison
        min_score: Similarité minimale acceptée

    Returns:
        (candidat, index) ou (None, None) si aucun n'atteint `min_score`
    """
    if query is None:
        return None, None
    start_time = time.time()
    dist = normalize(metric)
    best_index: Optional[int] = None
    best_dist = 1.0 - min_score

    for index, candidate in enumerate(candidates):
        if candidate is None:
            continue
        current = dist.evaluate(query, candidate, best_dist)
        # min_score inclusif pour le premier retenu, puis strictement meilleur
        if (best_index is None and current <= best_dist) or current < best_dist:
            best_index = index
            best_dist = current
            if best_dist == 0:
                break

    logger.debug(
        "find_best : {count} candidats en {ms} ms, meilleur index={index}",
        count=len(candidates),
        ms=round((time.time() - start_time) * 1000, 2),
        index=best_index,
    )
    if best_index is None:
        return None, None
    return candidates[best_index], best_index


def find_all(
        query: Sequence,
        candidates: Sequence[Optional[Sequence]],
        metric: Metric,
        min_score: Optional[float] = None) -> List[int]:
    """Indices (dans l'ordre) des candidats dont la similarité est >= `min_score`."""
    if query is None:
        return []
    if min_score is None:
        min_score = settings.DEFAULT_MIN_SCORE
    start_time = time.time()
    dist = normalize(metric)
    max_dist = 1.0 - min_score

    matches = [
        index
        for index, candidate in enumerate(candidates)
        if candidate is not None and dist.evaluate(query, candidate, max_dist) <= max_dist
    ]

    logger.debug(
        "find_all : {found}/{count} candidats retenus en {ms} ms",
        found=len(matches),
        count=len(candidates),
        ms=round((time.time() - start_time) * 1000, 2),
    )
    return matches
