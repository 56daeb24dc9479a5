"""Integration tests for the HTTP API, run against an in-process service."""

import pytest
from fastapi.testclient import TestClient

from backend.app.core.documents import JobDescriptionFetcher
from backend.app.core.errors import JobFetchError
from backend.app.dependencies import get_job_fetcher, get_optimization_service
from backend.app.main import get_app

RESUME = "Senior Java engineer. Built Spring Boot services on Kubernetes."
JD = "Java Spring Boot AWS"


class StubFetcher(JobDescriptionFetcher):
    def __init__(self, text=None, error=None):
        super().__init__()
        self.text = text
        self.error = error
        self.urls = []

    def fetch(self, url):
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def app(service):
    app = get_app()
    app.dependency_overrides[get_optimization_service] = lambda: service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.mark.integration
def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


@pytest.mark.integration
def test_submit_then_poll(client):
    resp = client.post("/api/optimizations", json={"resume_text": RESUME, "job_description": JD})

    assert resp.status_code == 202
    body = resp.json()
    assert body["status"] == "PENDING"

    result = client.get(f"/api/optimizations/{body['id']}").json()
    assert result["id"] == body["id"]
    assert result["status"] == "COMPLETED"
    assert result["extracted_keywords"] == ["java", "spring", "boot", "aws"]
    assert result["ats_score"] == 75
    assert result["optimized_bullet_points"]
    assert result["tailored_cover_letter"].startswith("Dear Hiring Manager,")
    assert result["error_message"] is None


@pytest.mark.integration
@pytest.mark.parametrize("payload", [
    {"resume_text": "   ", "job_description": JD},
    {"resume_text": RESUME, "job_description": ""},
    {"resume_text": RESUME},
])
def test_submit_rejects_blank_fields(client, service, payload):
    resp = client.post("/api/optimizations", json=payload)

    assert resp.status_code == 422
    assert service.scheduler.scheduled == []


@pytest.mark.integration
def test_unknown_job_is_404(client):
    resp = client.get("/api/optimizations/no-such-job")

    assert resp.status_code == 404
    assert resp.json()["detail"] == "Optimization job not found with id: no-such-job"


@pytest.mark.integration
def test_upload_resume_file(client):
    files = {"resume_file": ("resume.txt", RESUME.encode("utf-8"), "text/plain")}

    resp = client.post("/api/optimizations/upload-resume", files=files, data={"job_description": JD})

    assert resp.status_code == 202
    result = client.get(f"/api/optimizations/{resp.json()['id']}").json()
    assert result["ats_score"] == 75


@pytest.mark.integration
def test_upload_unsupported_file(client):
    files = {"resume_file": ("resume.exe", b"MZ\x90\x00", "application/octet-stream")}

    resp = client.post("/api/optimizations/upload-resume", files=files, data={"job_description": JD})

    assert resp.status_code == 400
    assert "Unsupported file type" in resp.json()["detail"]


@pytest.mark.integration
def test_fetch_job_from_url(app, client):
    fetcher = StubFetcher(text=JD)
    app.dependency_overrides[get_job_fetcher] = lambda: fetcher

    resp = client.post(
        "/api/optimizations/fetch-job",
        data={"resume_text": RESUME, "job_url": "https://jobs.example.com/42"},
    )

    assert resp.status_code == 202
    assert fetcher.urls == ["https://jobs.example.com/42"]
    assert client.get(f"/api/optimizations/{resp.json()['id']}").json()["status"] == "COMPLETED"


@pytest.mark.integration
def test_upload_file_and_url(app, client):
    app.dependency_overrides[get_job_fetcher] = lambda: StubFetcher(text=JD)
    files = {"resume_file": ("resume.txt", RESUME.encode("utf-8"), "text/plain")}

    resp = client.post("/api/optimizations/upload", files=files, data={"job_url": "https://jobs.example.com/42"})

    assert resp.status_code == 202


@pytest.mark.integration
def test_fetch_job_failure_is_502(app, client):
    app.dependency_overrides[get_job_fetcher] = lambda: StubFetcher(error=JobFetchError("Failed to fetch job description: timeout"))

    resp = client.post(
        "/api/optimizations/fetch-job",
        data={"resume_text": RESUME, "job_url": "https://jobs.example.com/42"},
    )

    assert resp.status_code == 502


@pytest.mark.integration
def test_fetched_page_without_text_is_400(app, client):
    app.dependency_overrides[get_job_fetcher] = lambda: StubFetcher(text="   ")

    resp = client.post(
        "/api/optimizations/fetch-job",
        data={"resume_text": RESUME, "job_url": "https://jobs.example.com/42"},
    )

    assert resp.status_code == 400


@pytest.mark.integration
def test_parse_document(client):
    files = {"file": ("resume.txt", b"  Jane Doe  ", "text/plain")}

    resp = client.post("/parse-document", files=files)

    assert resp.status_code == 200
    assert resp.json() == {"extracted_text": "Jane Doe"}
