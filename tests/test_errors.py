"""Tests for the application-wide error handlers"""
import logging

from fastapi.testclient import TestClient

from app.main import app
from app.services.review_service import ReviewService


def test_unhandled_error_returns_generic_500(monkeypatch, caplog):
    def broken(self, company_id, page=1, limit=10):
        raise RuntimeError("database exploded")

    monkeypatch.setattr(ReviewService, "list_for_company", broken)
    client = TestClient(app, raise_server_exceptions=False)

    with caplog.at_level(logging.ERROR):
        r = client.get("/api/reviews", params={"companyId": "c1"})

    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}

    records = [rec for rec in caplog.records if "Unhandled error" in rec.getMessage()]
    assert records
    assert records[0].getMessage() == "Unhandled error on GET /api/reviews"
    assert records[0].exc_info[0] is RuntimeError
    # Internal details stay out of the response
    assert "database exploded" not in r.text


def test_validation_error_is_400(client):
    r = client.post("/api/auth/login", json={"email": "not-an-email"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Validation failed"
    assert r.json()["errors"]
