from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from applykit.config import settings
from applykit.main import app
from applykit.services import application_service, cv_service, job_service

SAMPLE_CV_TEXT = """Jane Doe
jane.doe@example.com | +44 (20) 7946 0958
Skills
Python, SQL, Airflow
Experience
Data Engineer, Acme Co, 2020 - Present
Built batch pipelines
Education
BSc Computer Science, University of Leeds"""

SAMPLE_ANALYSIS = {
    "skills": ["Python", "SQL", "Airflow"],
    "experience": [
        {
            "title": "Data Engineer",
            "company": "Acme Co",
            "duration": "2020 - Present",
            "responsibilities": ["Built batch pipelines"],
        }
    ],
    "education": [
        {"degree": "BSc Computer Science", "institution": "University of Leeds", "year": 2019}
    ],
    "strengths": ["Pipeline design"],
    "recommendedRoles": ["Data Engineer", "Analytics Engineer"],
}

SAMPLE_JOBS = [
    {"id": "1", "company": "Beta", "role": "Data Engineer", "fitScore": 50, "responseProb": 40},
    {"id": "2", "company": "Gamma", "role": "Platform Engineer", "fitScore": 90, "responseProb": 70},
    {"id": "3", "company": "Delta", "role": "Analytics Engineer", "fitScore": 70, "responseProb": 60},
]


class FakeLLM:
    """Stands in for the LLM service. Replies are keyed by prompt name; exceptions are raised."""

    def __init__(self) -> None:
        self.replies: dict[str, Any] = {}
        self.calls: list[dict[str, Any]] = []

    async def _reply(self, kwargs: dict[str, Any]) -> Any:
        self.calls.append(kwargs)
        reply = self.replies[kwargs["prompt_name"]]
        if isinstance(reply, Exception):
            raise reply
        return reply

    async def complete_json(self, **kwargs: Any) -> Any:
        return await self._reply(kwargs)

    async def complete_text(self, **kwargs: Any) -> str:
        return await self._reply(kwargs)

    def prompts(self, prompt_name: str) -> list[str]:
        return [call["prompt"] for call in self.calls if call["prompt_name"] == prompt_name]


@pytest.fixture(autouse=True)
def server_api_key(monkeypatch):
    monkeypatch.setattr(settings, "openrouter_api_key", "test-key")
    monkeypatch.setattr(settings, "default_provider", "openrouter")
    monkeypatch.setattr(settings, "default_model_key", "gpt-4o-mini")


@pytest.fixture
def fake_llm(monkeypatch) -> FakeLLM:
    fake = FakeLLM()
    monkeypatch.setattr(cv_service, "complete_json", fake.complete_json)
    monkeypatch.setattr(job_service, "complete_json", fake.complete_json)
    monkeypatch.setattr(application_service, "complete_text", fake.complete_text)
    return fake


@pytest.fixture
def fake_pdf(monkeypatch):
    """Make PDF extraction return SAMPLE_CV_TEXT for any bytes."""
    monkeypatch.setattr(cv_service, "extract_pdf_text", lambda file_bytes: SAMPLE_CV_TEXT)


@pytest.fixture
def client() -> TestClient:
    with TestClient(app) as c:
        yield c
