"""Points d'entrée publics : evaluate, compare et construction des métriques par nom."""
from typing import Dict, Iterable, Optional, Sequence, Type

from fuzzscore.logger import logger
from fuzzscore.scoring.base import Metric
from fuzzscore.scoring.distance import DamerauLevenshtein, Hamming, Levenshtein
from fuzzscore.scoring.jaro import Jaro
from fuzzscore.scoring.modifiers import (
    Partial,
    TokenMax,
    TokenSet,
    TokenSort,
    Winkler,
    normalize,
)
from fuzzscore.scoring.qgram import Cosine, Jaccard, Overlap, QGram, QGramDistance, SorensenDice
from fuzzscore.scoring.ratcliff import RatcliffObershelp

BASE_METRICS: Dict[str, Type[Metric]] = {
    "hamming": Hamming,
    "levenshtein": Levenshtein,
    "damerau_levenshtein": DamerauLevenshtein,
    "jaro": Jaro,
    "qgram": QGram,
    "cosine": Cosine,
    "jaccard": Jaccard,
    "sorensen_dice": SorensenDice,
    "overlap": Overlap,
    "ratcliff_obershelp": RatcliffObershelp,
}

MODIFIERS = ("normalize", "winkler", "partial", "token_sort", "token_set", "token_max")


def evaluate(
    metric: Metric,
    s1: Optional[Sequence],
    s2: Optional[Sequence],
    max_dist: Optional[float] = None,
) -> Optional[float]:
    """Distance brute entre `s1` et `s2`, ou None si l'une des deux manque."""
    if s1 is None or s2 is None:
        return None
    return metric.evaluate(s1, s2, max_dist)


def compare(s1: Optional[Sequence], s2: Optional[Sequence], metric: Metric) -> Optional[float]:
    """
    Similarité dans [0, 1] : 1 - distance normalisée.

    Args:
        s1: Première séquence (ou None)
        s2: Deuxième séquence (ou None)
        metric: Métrique, normalisée si besoin

    Returns:
        Similarité, ou None si une entrée manque
    """
    dist = evaluate(normalize(metric), s1, s2)
    if dist is None:
        return None
    return 1.0 - dist


def build_metric(
    name: str,
    modifiers: Iterable[str] = (),
    q: Optional[int] = None,
    p: Optional[float] = None,
    threshold: Optional[float] = None,
    maxlength: Optional[int] = None,
) -> Metric:
    """
    Construit une métrique à partir de son nom et d'une liste de modificateurs.

    Les modificateurs sont appliqués du plus interne au plus externe :
    `build_metric("jaro", ["winkler"])` donne `Winkler(Jaro())`.

    Args:
        name: Nom de la métrique de base (voir BASE_METRICS)
        modifiers: Noms de modificateurs (voir MODIFIERS)
        q: Taille des q-grammes (métriques q-grammes uniquement)
        p: Facteur de bonus Winkler (défaut : settings.WINKLER_P)
        threshold: Seuil du bonus Winkler
        maxlength: Longueur de préfixe maximale Winkler

    Returns:
        La métrique composée
    """
    key = name.lower()
    if key not in BASE_METRICS:
        raise ValueError(f"métrique inconnue : {name!r} (connues : {sorted(BASE_METRICS)})")
    cls = BASE_METRICS[key]
    if q is not None:
        if not issubclass(cls, QGramDistance):
            raise ValueError(f"q ne s'applique qu'aux métriques q-grammes, pas à {name!r}")
        metric: Metric = cls(q=q)
    else:
        metric = cls()

    for modifier in modifiers:
        mod = modifier.lower()
        if mod == "normalize":
            metric = normalize(metric)
        elif mod == "winkler":
            given = {"p": p, "threshold": threshold, "maxlength": maxlength}
            params = {k: v for k, v in given.items() if v is not None}
            metric = Winkler(metric, **params)
        elif mod == "partial":
            metric = Partial(metric)
        elif mod == "token_sort":
            metric = TokenSort(metric)
        elif mod == "token_set":
            metric = TokenSet(metric)
        elif mod == "token_max":
            metric = TokenMax(metric)
        else:
            raise ValueError(f"modificateur inconnu : {modifier!r} (connus : {list(MODIFIERS)})")

    logger.debug("Métrique construite : {metric!r}", metric=metric)
    return metric
