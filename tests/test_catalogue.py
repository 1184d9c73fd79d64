"""Tests for /api/jobs and /api/companies"""
from app.db.mongodb import COLLECTIONS


def test_list_jobs_newest_first(client, jobs):
    body = client.get("/api/jobs").json()
    assert body["total"] == 3
    assert [j["id"] for j in body["jobs"]] == ["job3", "job2", "job1"]


def test_list_jobs_search_and_pagination(client, jobs):
    body = client.get("/api/jobs", params={"search": "DEVELOPER", "pageSize": 1, "page": 2}).json()
    assert body["total"] == 2
    assert [j["id"] for j in body["jobs"]] == ["job1"]
    assert body["jobs"][0]["salary"] == {"min": 120000, "max": 150000, "currency": "USD"}


def test_get_job(client, jobs):
    assert client.get("/api/jobs/job2").json()["title"] == "Full Stack Engineer"
    assert client.get("/api/jobs/missing").status_code == 404


def test_job_without_company(client, mongo_db):
    mongo_db[COLLECTIONS["jobs"]].insert_one({"_id": "job9", "title": "Freelance Designer"})
    r = client.get("/api/jobs/job9")
    assert r.status_code == 200
    assert r.json()["companyId"] is None
    assert client.get("/api/jobs").json()["jobs"][0]["companyId"] is None

def test_get_company_with_ratings(client, auth_headers, review_payload):
    client.post("/api/reviews", json=review_payload, headers=auth_headers)
    body = client.get("/api/companies/c1").json()
    assert body["name"] == "TechCorp"
    assert body["ratings"]["reviewCount"] == 1
    assert body["ratings"]["averageRating"] == 4.0


def test_get_company_missing(client):
    assert client.get("/api/companies/c404").status_code == 404
