from __future__ import annotations


def test_health_ok(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "variant": "coaching"}


def test_metrics_exposes_feedback_counter(client) -> None:
    res = client.get("/metrics")
    assert res.status_code == 200
    assert "feedback_evaluations_total" in res.text
