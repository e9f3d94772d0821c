"""Modèles Pydantic pour les requêtes et réponses."""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, ConfigDict

from fuzzscore.scoring.base import Metric
from fuzzscore.scoring.compare import build_metric


class MetricDefinition(BaseModel):  # pylint: disable=too-few-public-methods
    """Description d'une métrique composée : base + modificateurs."""
    name: str = "levenshtein"
    # Appliqués du plus interne au plus externe
    modifiers: List[str] = Field(default_factory=list)
    q: Optional[int] = None
    p: Optional[float] = None
    threshold: Optional[float] = None
    maxlength: Optional[int] = None

    def build(self) -> Metric:
        """Construit la métrique (lève ValueError / ConfigurationError)."""
        return build_metric(
            self.name,
            self.modifiers,
            q=self.q,
            p=self.p,
            threshold=self.threshold,
            maxlength=self.maxlength,
        )


class CompareRequest(BaseModel):  # pylint: disable=too-few-public-methods
    """Requête de comparaison de deux chaînes."""
    s1: Optional[str] = None
    s2: Optional[str] = None
    metric: MetricDefinition = Field(default_factory=MetricDefinition)


class CompareResponse(BaseModel):  # pylint: disable=too-few-public-methods
    """Similarité et distance normalisée (None si une entrée manque)."""
    similarity: Optional[float] = None
    distance: Optional[float] = None
    query_time_ms: float


class EvaluateRequest(CompareRequest):  # pylint: disable=too-few-public-methods
    """Requête d'évaluation brute, avec borne optionnelle."""
    max_dist: Optional[float] = None


class EvaluateResponse(BaseModel):  # pylint: disable=too-few-public-methods
    """Distance brute (None si une entrée manque)."""
    distance: Optional[float] = None
    query_time_ms: float


class FindRequest(BaseModel):  # pylint: disable=too-few-public-methods
    """Recherche d'une chaîne parmi des candidats."""
    query: str
    candidates: List[Optional[str]]
    metric: MetricDefinition = Field(default_factory=MetricDefinition)
    min_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    mode: Literal["best", "all"] = "best"


class Match(BaseModel):  # pylint: disable=too-few-public-methods
    """Un candidat retenu."""
    index: int
    candidate: str
    similarity: float


class FindResponse(BaseModel):  # pylint: disable=too-few-public-methods
    """Réponse de recherche."""
    matches: List[Match]
    total: int
    query_time_ms: float

    model_config = ConfigDict(extra="allow")
