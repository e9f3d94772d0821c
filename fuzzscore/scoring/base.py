"""Protocole commun des métriques et fonctions utilitaires sur les séquences."""
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence, Tuple


class ConfigurationError(ValueError):
    """Paramètres de métrique invalides, levée à la construction."""


class Metric(ABC):
    """
    Métrique de distance entre deux séquences.

    Contrat de `max_dist` : si la vraie distance dépasse `max_dist`, la métrique
    peut renvoyer n'importe quelle valeur >= `max_dist` au lieu de la valeur
    exacte. `max_dist=None` signifie « pas de borne ».
    """

    @property
    def is_normalized(self) -> bool:
        """True si la sortie est toujours dans [0, 1]."""
        return False

    @abstractmethod
    def evaluate(self, s1: Sequence, s2: Sequence, max_dist: Optional[float] = None) -> float:
        """Calcule la distance entre `s1` et `s2`."""


def reorder(s1: Sequence, s2: Sequence) -> Tuple[Sequence, Sequence]:
    """Renvoie la paire avec la plus courte en premier (ordre d'origine si égalité)."""
    if len(s1) <= len(s2):
        return s1, s2
    return s2, s1


def common_prefix(s1: Sequence, s2: Sequence) -> int:
    """Longueur du préfixe commun."""
    n = min(len(s1), len(s2))
    i = 0
    while i < n and s1[i] == s2[i]:
        i += 1
    return i


def qgrams(s: Sequence, q: int) -> Iterator[Sequence]:
    """
    Itère sur les fenêtres contiguës de longueur `q`, dans l'ordre de `s`.

    Args:
        s: Séquence source
        q: Taille de fenêtre (>= 1)

    Returns:
        Générateur des `len(s) - q + 1` fenêtres (aucune si `len(s) < q`)
    """
    if q <= 0:
        raise ValueError(f"q doit être strictement positif (reçu {q})")
    for i in range(len(s) - q + 1):
        yield s[i:i + q]


def split_words(s: str) -> List[str]:
    """Découpe sur les blancs ; seule tokenisation utilisée par les modificateurs."""
    if not isinstance(s, str):
        raise TypeError(f"les modificateurs de tokens attendent des str, reçu {type(s).__name__}")
    return s.split()
