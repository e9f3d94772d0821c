"""Main module for the FastAPI application."""
import time
from contextlib import asynccontextmanager
from typing import List

from fastapi import FastAPI, HTTPException, status

from .logger import logger
from .models import (
    CompareRequest,
    CompareResponse,
    EvaluateRequest,
    EvaluateResponse,
    FindRequest,
    FindResponse,
    Match,
    MetricDefinition,
)
from .scoring.base import Metric
from .scoring.compare import compare, evaluate
from .scoring.modifiers import normalize
from .search.finder import find_all, find_best


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Handle FastAPI startup and shutdown events."""
    logger.info("Starting up fuzzscore API...")
    yield
    logger.info("Shutting down fuzzscore API...")


app = FastAPI(
    title="fuzzscore - String Similarity Service",
    lifespan=lifespan
)


def _elapsed_ms(start_time: float) -> float:
    return round((time.time() - start_time) * 1000, 2)


def _build(definition: MetricDefinition) -> Metric:
    """Construit la métrique ; une configuration invalide devient une 422."""
    try:
        return definition.build()
    except ValueError as e:
        logger.warning("Invalid metric {definition}: {error}", definition=definition.model_dump(), error=e)
        raise HTTPException(
            status_code=422, detail={"error": str(e)}
        ) from e


@app.post("/compare", response_model=CompareResponse)
async def compare_strings(req: CompareRequest):
    """POST /compare : similarité normalisée de deux chaînes."""
    start_time = time.time()
    metric = _build(req.metric)
    try:
        distance = evaluate(normalize(metric), req.s1, req.s2)
    except Exception as e:
        logger.exception("Error processing compare request")
        raise HTTPException(status_code=500, detail={"error": str(e)}) from e
    similarity = None if distance is None else 1.0 - distance
    return CompareResponse(
        similarity=similarity, distance=distance, query_time_ms=_elapsed_ms(start_time)
    )


@app.post("/evaluate", response_model=EvaluateResponse)
async def evaluate_strings(req: EvaluateRequest):
    """POST /evaluate : distance brute, bornée par max_dist si fourni."""
    start_time = time.time()
    metric = _build(req.metric)
    try:
        distance = evaluate(metric, req.s1, req.s2, req.max_dist)
    except Exception as e:
        logger.exception("Error processing evaluate request")
        raise HTTPException(status_code=500, detail={"error": str(e)}) from e
    return EvaluateResponse(distance=distance, query_time_ms=_elapsed_ms(start_time))


@app.post("/find", response_model=FindResponse)
async def find(req: FindRequest):
    """POST /find : meilleur candidat (mode 'best') ou tous ceux au-dessus du seuil."""
    start_time = time.time()
    metric = _build(req.metric)
    logger.info(
        "Find request: mode={mode}, {count} candidates, metric={metric}",
        mode=req.mode, count=len(req.candidates), metric=req.metric.name,
    )
    try:
        if req.mode == "best":
            min_score = 0.0 if req.min_score is None else req.min_score
            _, index = find_best(req.query, req.candidates, metric, min_score)
            indices: List[int] = [] if index is None else [index]
        else:
            indices = find_all(req.query, req.candidates, metric, req.min_score)
        matches = [
            Match(
                index=i,
                candidate=req.candidates[i],
                similarity=compare(req.query, req.candidates[i], metric),
            )
            for i in indices
        ]
    except Exception as e:
        logger.exception("Error processing find request")
        raise HTTPException(status_code=500, detail={"error": str(e)}) from e
    return FindResponse(matches=matches, total=len(matches), query_time_ms=_elapsed_ms(start_time))


@app.get("/")
def root():
    """Root endpoint to check API status."""
    return {"status": "ok", "message": "fuzzscore API is running 🚀"}


@app.get("/health", status_code=status.HTTP_200_OK, tags=["Monitoring"])
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}
