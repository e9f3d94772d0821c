"""
Modificateurs de métriques.

Chaque modificateur enveloppe une métrique de base (ou un autre modificateur)
et produit une nouvelle métrique normalisée dans [0, 1]. La borne `max_dist`
est propagée vers les métriques internes pour leur permettre de s'arrêter tôt ;
un résultat au-delà de la borne n'est fiable que dans sa comparaison à la borne.
"""
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from fuzzscore.config import settings
from fuzzscore.logger import logger
from fuzzscore.scoring.base import (
    ConfigurationError,
    Metric,
    common_prefix,
    qgrams,
    reorder,
    split_words,
)
from fuzzscore.scoring.distance import DamerauLevenshtein, Hamming, Levenshtein
from fuzzscore.scoring.qgram import QGram, QGramDistance
from fuzzscore.scoring.ratcliff import RatcliffObershelp, matching_blocks

EDIT_DISTANCES = (Hamming, Levenshtein, DamerauLevenshtein)


def normalize(metric: Metric) -> Metric:
    """Renvoie une métrique dont `evaluate` est toujours dans [0, 1] (ou None)."""
    return metric if metric.is_normalized else Normalize(metric)


def _is_missing(s1, s2) -> bool:
    return s1 is None or s2 is None


def _bound(max_dist: Optional[float]) -> float:
    return 1.0 if max_dist is None else max_dist


@dataclass(frozen=True)
class Normalize(Metric):
    """Ramène une distance d'édition ou de q-grammes dans [0, 1]."""

    inner: Metric

    def __post_init__(self):
        if not isinstance(self.inner, EDIT_DISTANCES + (QGramDistance,)):
            raise ConfigurationError(
                f"impossible de normaliser {type(self.inner).__name__}"
            )

    @property
    def is_normalized(self) -> bool:
        return True

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> Optional[float]:
        if _is_missing(s1, s2):
            return None
        max_dist = _bound(max_dist)
        s1, s2 = reorder(s1, s2)
        len1, len2 = len(s1), len(s2)

        if isinstance(self.inner, QGramDistance):
            q = self.inner.q
            # Pas de q-gramme en dessous de q caractères : égalité stricte
            if len1 < q:
                return float(s1 != s2)
            if isinstance(self.inner, QGram):
                return self.inner.evaluate(s1, s2) / (len1 + len2 - 2 * q + 2)
            return self.inner.evaluate(s1, s2)

        # Deux chaînes vides : 1.0, comportement historique conservé tel quel
        if len2 == 0:
            return 1.0
        dist = self.inner.evaluate(s1, s2, max(0, math.ceil(len2 * max_dist)))
        out = dist / len2
        return 1.0 if out > max_dist else out


@dataclass(frozen=True)
class Modifier(Metric):
    """Base des modificateurs : la métrique interne est normalisée à la construction."""

    inner: Metric

    def __post_init__(self):
        object.__setattr__(self, "inner", normalize(self.inner))

    @property
    def is_normalized(self) -> bool:
        return True


@dataclass(frozen=True)
class Winkler(Modifier):
    """
    Réduit la distance de deux chaînes partageant un préfixe.

    Le bonus vaut `min(l, maxlength) * p * distance`, `l` étant la longueur du
    préfixe commun, et ne s'applique que si la distance est <= 1 - threshold.
    """

    p: float = field(default_factory=lambda: settings.WINKLER_P)
    threshold: float = field(default_factory=lambda: settings.WINKLER_THRESHOLD)
    maxlength: int = field(default_factory=lambda: settings.WINKLER_MAXLENGTH)

    def __post_init__(self):
        if self.p * self.maxlength > 1:
            raise ConfigurationError(
                f"p * maxlength doit être <= 1 (p={self.p}, maxlength={self.maxlength})"
            )
        super().__post_init__()

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> Optional[float]:
        if _is_missing(s1, s2):
            return None
        # Le seuil de bonus exige le score exact : pas de borne ici
        score = self.inner.evaluate(s1, s2)
        if score <= 1 - self.threshold:
            prefix = common_prefix(s1, s2)
            score -= min(prefix, self.maxlength) * self.p * score
        return score


@dataclass(frozen=True)
class Partial(Modifier):
    """Distance minimale entre la chaîne courte et les sous-chaînes de la longue."""

    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> Optional[float]:
        if _is_missing(s1, s2):
            return None
        max_dist = _bound(max_dist)
        s1, s2 = reorder(s1, s2)
        if isinstance(self.inner, RatcliffObershelp):
            return self._evaluate_blocks(s1, s2)

        len1, len2 = len(s1), len(s2)
        if len1 == len2:
            return self.inner.evaluate(s1, s2, max_dist)
        if len1 == 0:
            return 0.0
        out = 1.0
        for window in qgrams(s2, len1):
            out = min(out, self.inner.evaluate(s1, window, max_dist))
            max_dist = min(out, max_dist)
        return out

    def _evaluate_blocks(self, s1: Sequence, s2: Sequence) -> float:
        """Une seule fenêtre candidate par bloc commun, alignée sur ce bloc."""
        len1, len2 = len(s1), len(s2)
        if len1 == len2:
            return self.inner.evaluate(s1, s2)
        out = 1.0
        for offset1, offset2, _ in matching_blocks(s1, s2):
            start = min(max(offset2 - offset1, 0), len2 - len1)
            out = min(out, self.inner.evaluate(s1, s2[start:start + len1]))
        return out


@dataclass(frozen=True)
class TokenSort(Modifier):
    """Trie les mots par ordre alphabétique avant de comparer."""

    def evaluate(self, s1: str, s2: str, max_dist: Optional[float] = None) -> Optional[float]:
        if _is_missing(s1, s2):
            return None
        s1 = " ".join(sorted(split_words(s1)))
        s2 = " ".join(sorted(split_words(s2)))
        return self.inner.evaluate(s1, s2, max_dist)


@dataclass(frozen=True)
class TokenSet(Modifier):
    """Compare l'intersection des mots avec chacune des deux chaînes."""

    def evaluate(self, s1: str, s2: str, max_dist: Optional[float] = None) -> Optional[float]:
        if _is_missing(s1, s2):
            return None
        v1 = sorted(set(split_words(s1)))
        v2 = sorted(set(split_words(s2)))
        shared = set(v2)
        s0 = " ".join(w for w in v1 if w in shared)
        s1 = " ".join(v1)
        s2 = " ".join(v2)
        if not s0:
            return self.inner.evaluate(s1, s2, max_dist)

        max_dist = _bound(max_dist)
        score_01 = self.inner.evaluate(s0, s1, max_dist)
        max_dist = min(max_dist, score_01)
        score_02 = self.inner.evaluate(s0, s2, max_dist)
        max_dist = min(max_dist, score_02)
        score_12 = self.inner.evaluate(s1, s2, max_dist)
        return min(score_01, score_02, score_12)


def _rescaled(metric: Metric, s1: str, s2: str, max_dist: float, scale: float) -> float:
    """
    Évalue `metric` sur une échelle pénalisée par `scale`.

    La borne passée est l'image inverse de `max_dist`, si bien qu'un score brut
    au-delà de cette borne donne un score final au-delà de `max_dist`.
    """
    raw = metric.evaluate(s1, s2, 1 - (1 - max_dist) / scale)
    return 1 - scale * (1 - raw)


@dataclass(frozen=True)
class TokenMax(Modifier):
    """
    Minimum de la distance de base et de ses variantes Partial, TokenSort et
    TokenSet, pénalisées selon l'écart de longueur entre les deux chaînes.
    """

    def evaluate(self, s1: str, s2: str, max_dist: Optional[float] = None) -> Optional[float]:
        if _is_missing(s1, s2):
            return None
        max_dist = _bound(max_dist)
        s1, s2 = reorder(s1, s2)
        len1, len2 = len(s1), len(s2)
        score = self.inner.evaluate(s1, s2, max_dist)
        max_dist = min(max_dist, score)
        unbase_scale = settings.TOKEN_MAX_UNBASE_SCALE

        # Chaîne beaucoup plus courte que l'autre : on passe par Partial
        if len2 >= settings.PARTIAL_RATIO * len1:
            if len2 > settings.PARTIAL_FAR_RATIO * len1:
                partial_scale = settings.PARTIAL_SCALE_FAR
            else:
                partial_scale = settings.PARTIAL_SCALE
            logger.debug(
                "TokenMax : régime partiel (len1={len1}, len2={len2}, scale={scale})",
                len1=len1, len2=len2, scale=partial_scale,
            )
            partial = Partial(self.inner)
            score_partial = _rescaled(partial, s1, s2, max_dist, partial_scale)
            max_dist = min(max_dist, score_partial)
            score_sort = _rescaled(TokenSort(partial), s1, s2, max_dist, unbase_scale * partial_scale)
            max_dist = min(max_dist, score_sort)
            score_set = _rescaled(TokenSet(partial), s1, s2, max_dist, unbase_scale * partial_scale)
            return min(score, score_partial, score_sort, score_set)

        logger.debug("TokenMax : régime direct (len1={len1}, len2={len2})", len1=len1, len2=len2)
        score_sort = _rescaled(TokenSort(self.inner), s1, s2, max_dist, unbase_scale)
        max_dist = min(max_dist, score_sort)
        score_set = _rescaled(TokenSet(self.inner), s1, s2, max_dist, unbase_scale)
        return min(score, score_sort, score_set)
