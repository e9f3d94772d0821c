# tests/test_api.py
from unittest.mock import patch

import pytest

from test_utils import print_test_name, print_test_result


def test_compare_identical(client):
    test_name = "test_compare_identical"
    print_test_name(test_name)
    try:
        payload = {"s1": "New York", "s2": "New York", "metric": {"name": "levenshtein"}}
        resp = client.post("/compare", json=payload)
        assert resp.status_code == 200
        body = resp.json()
        assert body["similarity"] == 1.0
        assert body["distance"] == 0.0
        assert body["query_time_ms"] >= 0
        print_test_result(test_name, passed=True)
    except Exception as e:
        print_test_result(test_name, passed=False)
        raise e


def test_compare_missing_operand(client):
    resp = client.post("/compare", json={"s1": "New York", "s2": None})
    assert resp.status_code == 200
    assert resp.json()["similarity"] is None
    assert resp.json()["distance"] is None


def test_evaluate_token_max(client):
    test_name = "test_evaluate_token_max"
    print_test_name(test_name)
    try:
        payload = {
            "s1": "New York Mets vs Atlanta",
            "s2": "Atlanta Braves vs New York Mets",
            "metric": {"name": "ratcliff_obershelp", "modifiers": ["token_max"]},
        }
        resp = client.post("/evaluate", json=payload)
        assert resp.status_code == 200
        assert resp.json()["distance"] == pytest.approx(0.05)
        print_test_result(test_name, passed=True)
    except Exception as e:
        print_test_result(test_name, passed=False)
        raise e


def test_evaluate_raw_distance(client):
    payload = {"s1": "kitten", "s2": "sitting", "metric": {"name": "levenshtein"}}
    assert client.post("/evaluate", json=payload).json()["distance"] == 3


def test_invalid_winkler_configuration(client):
    payload = {
        "s1": "martha",
        "s2": "marhta",
        "metric": {"name": "jaro", "modifiers": ["winkler"], "p": 0.5, "maxlength": 4},
    }
    resp = client.post("/compare", json=payload)
    assert resp.status_code == 422
    assert "maxlength" in resp.json()["detail"]["error"]


def test_unknown_metric(client):
    resp = client.post("/compare", json={"s1": "a", "s2": "b", "metric": {"name": "soundex"}})
    assert resp.status_code == 422


def test_find_best(client):
    test_name = "test_find_best"
    print_test_name(test_name)
    try:
        payload = {
            "query": "New York",
            "candidates": ["NY", "New York City", None, "new york"],
            "metric": {"name": "levenshtein"},
        }
        resp = client.post("/find", json=payload)
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 1
        assert body["matches"][0]["index"] == 3
        assert body["matches"][0]["candidate"] == "new york"
        assert body["matches"][0]["similarity"] == pytest.approx(0.75)
        print_test_result(test_name, passed=True)
    except Exception as e:
        print_test_result(test_name, passed=False)
        raise e


def test_find_all(client):
    payload = {
        "query": "New York",
        "candidates": ["NY", "New York City", None, "new york"],
        "metric": {"name": "levenshtein"},
        "mode": "all",
        "min_score": 0.6,
    }
    body = client.post("/find", json=payload).json()
    assert [m["index"] for m in body["matches"]] == [1, 3]
    assert body["total"] == 2


def test_find_internal_error(client):
    with patch("fuzzscore.main.find_best", side_effect=RuntimeError("boom")):
        resp = client.post("/find", json={"query": "a", "candidates": ["a"]})
    assert resp.status_code == 500
    assert resp.json()["detail"] == {"error": "boom"}


def test_root_and_health(client):
    assert client.get("/").json()["status"] == "ok"
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
