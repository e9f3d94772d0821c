# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from fuzzscore.scoring.distance import DamerauLevenshtein, Hamming, Levenshtein
from fuzzscore.scoring.jaro import Jaro
from fuzzscore.scoring.qgram import Cosine, Jaccard, Overlap, QGram, SorensenDice
from fuzzscore.scoring.ratcliff import RatcliffObershelp

@pytest.fixture(params=[
    Hamming(), Levenshtein(), DamerauLevenshtein(), Jaro(), RatcliffObershelp(),
    QGram(2), Cosine(2), Jaccard(2), SorensenDice(2), Overlap(2),
], ids=lambda m: type(m).__name__)
def base_metric(request):
    """Chaque métrique de base, une à la fois."""
    return request.param


@pytest.fixture
def client():
    """Client de test FastAPI (avec lifespan)."""
    from fuzzscore.main import app

    with TestClient(app) as test_client:
        yield test_client
