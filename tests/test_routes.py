from io import BytesIO

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from applykit.api.cv_routes import upload_cv
from applykit.config import settings
from applykit.services import cv_service
from applykit.services.cv_service import PDFExtractionError
from applykit.utils.json_response import LLMResponseError

from conftest import SAMPLE_ANALYSIS, SAMPLE_CV_TEXT, SAMPLE_JOBS

JOB = {
    "company": "Acme Co",
    "role": "Data Engineer",
    "description": "Own the batch platform",
    "requirements": ["Python"],
}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


# ── /upload-cv ───────────────────────────────────────────────────────────────


def test_upload_rejects_non_pdf(client):
    resp = client.post("/upload-cv", files={"cv": ("cv.txt", b"hello", "text/plain")})
    assert resp.status_code == 400
    assert "PDF" in resp.json()["error"]


def test_upload_rejects_oversize_file(client):
    too_big = b"0" * (10 * 1024 * 1024 + 1)
    resp = client.post("/upload-cv", files={"cv": ("cv.pdf", too_big, "application/pdf")})
    assert resp.status_code == 400
    assert "10MB" in resp.json()["error"]


def test_upload_requires_file(client):
    resp = client.post("/upload-cv", data={"note": "no file"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "No file uploaded"}


def test_upload_returns_parsed_cv(client, fake_pdf):
    resp = client.post("/upload-cv", files={"cv": ("jane.pdf", b"%PDF-1.4 fake", "application/pdf")})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["fileName"] == "jane.pdf"
    assert body["data"]["fileSize"] == len(b"%PDF-1.4 fake")
    parsed = body["data"]["parsedCV"]
    assert parsed["rawText"] == SAMPLE_CV_TEXT
    assert parsed["email"] == "jane.doe@example.com"
    assert parsed["skills"] == "Skills\nPython, SQL, Airflow"


def test_upload_extraction_failure_is_500(client, monkeypatch):
    def broken(file_bytes):
        raise PDFExtractionError("Failed to extract text from PDF")

    monkeypatch.setattr(cv_service, "extract_pdf_text", broken)
    resp = client.post("/upload-cv", files={"cv": ("cv.pdf", b"%PDF", "application/pdf")})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to process CV"}


def test_upload_unreadable_pdf_is_500(client):
    resp = client.post("/upload-cv", files={"cv": ("cv.pdf", b"this is not a pdf", "application/pdf")})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to process CV"}


async def test_upload_checks_reported_size_before_reading():
    small_body = BytesIO(b"%PDF")
    cv = UploadFile(
        file=small_body,
        size=settings.max_upload_bytes + 1,
        filename="cv.pdf",
        headers=Headers({"content-type": "application/pdf"}),
    )

    with pytest.raises(HTTPException) as exc_info:
        await upload_cv(cv)

    assert exc_info.value.status_code == 400
    assert "10MB" in exc_info.value.detail
    assert small_body.tell() == 0


# ── /analyze-cv ──────────────────────────────────────────────────────────────


def test_analyze_requires_text_or_link(client, fake_llm):
    resp = client.post("/analyze-cv", json={"cvText": "", "linkedInURL": None})
    assert resp.status_code == 400
    assert resp.json() == {"error": "CV text or LinkedIn URL is required"}
    assert fake_llm.calls == []


def test_analyze_returns_camel_case_analysis(client, fake_llm):
    fake_llm.replies["cv_analysis"] = SAMPLE_ANALYSIS

    resp = client.post("/analyze-cv", json={"cvText": SAMPLE_CV_TEXT})

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["recommendedRoles"] == ["Data Engineer", "Analytics Engineer"]
    assert data["education"][0] == {
        "degree": "BSc Computer Science",
        "institution": "University of Leeds",
        "year": "2019",
    }
    assert SAMPLE_CV_TEXT in fake_llm.prompts("cv_analysis")[0]
    assert fake_llm.calls[0]["json_mode"] is True


def test_analyze_from_linkedin_link(client, fake_llm):
    fake_llm.replies["cv_analysis"] = {}

    resp = client.post("/analyze-cv", json={"linkedInURL": "https://www.linkedin.com/in/jane-doe/"})

    assert resp.status_code == 200
    assert resp.json()["data"]["skills"] == []
    prompt = fake_llm.prompts("cv_analysis")[0]
    assert "LinkedIn Profile: https://www.linkedin.com/in/jane-doe/" in prompt
    assert "LinkedIn Username: jane-doe" in prompt


def test_analyze_hides_upstream_error(client, fake_llm):
    fake_llm.replies["cv_analysis"] = LLMResponseError("raw model garbage")

    resp = client.post("/analyze-cv", json={"cvText": "text"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to analyze CV"}


def test_missing_api_key_is_400(client, fake_llm, monkeypatch):
    monkeypatch.setattr(settings, "openrouter_api_key", None)
    resp = client.post("/analyze-cv", json={"cvText": "text"})
    assert resp.status_code == 400
    assert "Missing API key" in resp.json()["error"]


def test_header_key_and_provider_are_used(client, fake_llm, monkeypatch):
    monkeypatch.setattr(settings, "openrouter_api_key", None)
    fake_llm.replies["cv_analysis"] = {}

    resp = client.post(
        "/analyze-cv",
        json={"cvText": "text"},
        headers={"X-LLM-Provider": "groq", "X-Groq-Key": "groq-key"},
    )

    assert resp.status_code == 200
    call = fake_llm.calls[0]
    assert (call["provider"], call["model_key"], call["api_key"]) == ("groq", "llama-3.3-70b", "groq-key")


def test_unknown_provider_is_400(client, fake_llm):
    resp = client.post("/analyze-cv", json={"cvText": "text"}, headers={"X-LLM-Provider": "acme"})
    assert resp.status_code == 400
    assert "acme" in resp.json()["error"]


# ── /search-jobs ─────────────────────────────────────────────────────────────


def test_search_requires_analysis_and_role(client, fake_llm):
    missing_role = client.post("/search-jobs", json={"cvAnalysis": SAMPLE_ANALYSIS, "seniority": "Mid"})
    missing_analysis = client.post("/search-jobs", json={"targetRole": "Data Engineer"})

    for resp in (missing_role, missing_analysis):
        assert resp.status_code == 400
        assert resp.json() == {"error": "CV analysis and target role are required"}


def test_search_sorts_jobs_by_fit(client, fake_llm):
    fake_llm.replies["job_search"] = SAMPLE_JOBS

    resp = client.post(
        "/search-jobs",
        json={"cvAnalysis": SAMPLE_ANALYSIS, "targetRole": "Data Engineer", "seniority": "Senior"},
    )

    assert resp.status_code == 200
    data = resp.json()["data"]
    assert [job["fitScore"] for job in data["jobs"]] == [90, 70, 50]
    assert all(isinstance(job["fitScore"], int) for job in data["jobs"])
    assert data["totalMatches"] == 3
    assert set(data["jobs"][0]) >= {"jobType", "responseProb", "matchReason"}


def test_search_defaults_seniority(client, fake_llm):
    fake_llm.replies["job_search"] = {"jobs": []}

    resp = client.post("/search-jobs", json={"cvAnalysis": {}, "targetRole": "Designer"})

    assert resp.status_code == 200
    assert resp.json()["data"] == {"jobs": [], "totalMatches": 0}
    assert "Seniority Level: Mid" in fake_llm.prompts("job_search")[0]


def test_search_unexpected_shape_is_500(client, fake_llm):
    fake_llm.replies["job_search"] = {"message": "no jobs today"}

    resp = client.post("/search-jobs", json={"cvAnalysis": SAMPLE_ANALYSIS, "targetRole": "X"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to search for jobs"}


# ── /generate-applications ───────────────────────────────────────────────────


def test_generate_requires_cv_text_and_job(client, fake_llm):
    missing_text = client.post("/generate-applications", json={"job": JOB})
    missing_job = client.post("/generate-applications", json={"cvText": "cv"})

    for resp in (missing_text, missing_job):
        assert resp.status_code == 400
        assert resp.json() == {"error": "CV text and job details are required"}


def test_generate_returns_all_documents(client, fake_llm):
    fake_llm.replies.update({
        "tailored_cv": "CV",
        "cover_letter": "LETTER",
        "application_email": "EMAIL",
    })

    resp = client.post(
        "/generate-applications",
        json={"cvText": "cv", "job": JOB, "candidateInfo": {"name": "Jane", "skills": ["Python"]}},
    )

    assert resp.status_code == 200
    assert resp.json() == {
        "success": True,
        "data": {
            "cv": "CV",
            "coverLetter": "LETTER",
            "email": "EMAIL",
            "jobId": "acme_co_data_engineer",
        },
    }


def test_generate_fails_whole_batch_on_one_error(client, fake_llm):
    fake_llm.replies.update({
        "tailored_cv": "CV",
        "cover_letter": RuntimeError("provider timeout"),
        "application_email": "EMAIL",
    })

    resp = client.post("/generate-applications", json={"cvText": "cv", "job": JOB})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to generate application materials"}


def test_malformed_body_is_400(client, fake_llm):
    resp = client.post("/generate-applications", json={"cvText": "cv", "job": {"role": "No company"}})
    assert resp.status_code == 400
    assert "company" in resp.json()["error"]


# ── /llm ─────────────────────────────────────────────────────────────────────


def test_list_providers(client):
    resp = client.get("/llm/providers")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()["providers"]] == ["openrouter", "google", "groq"]


def test_validate_key_rejects_blank_key(client):
    resp = client.post("/llm/validate-key", json={"provider": "openrouter", "key": "  "})
    assert resp.status_code == 400
    assert resp.json() == {"error": "API key cannot be empty"}
