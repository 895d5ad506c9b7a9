"""
API Client — async HTTP client for the ApplyKit routes.

Mirrors the four wizard calls. A non-2xx response raises ApplyKitAPIError
carrying the server's {"error": ...} message.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from applykit.models.application_models import CandidateInfo, GeneratedApplication, JobSummary
from applykit.models.cv_models import CVAnalysis, UploadResult
from applykit.models.job_models import Job

logger = logging.getLogger(__name__)


class ApplyKitAPIError(Exception):
    """An API call returned an error response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApplyKitClient:
    """Thin wrapper over httpx.AsyncClient. Use as an async context manager."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        *,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "ApplyKitClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ── Calls ───────────────────────────────────────────────────────────────

    async def upload_cv(self, file_bytes: bytes, file_name: str = "cv.pdf") -> UploadResult:
        resp = await self._client.post(
            "/upload-cv",
            files={"cv": (file_name, file_bytes, "application/pdf")},
        )
        return UploadResult.model_validate(self._data(resp, "Failed to upload CV"))

    async def analyze_cv(self, cv_text: str, linkedin_url: str | None = None) -> CVAnalysis:
        resp = await self._client.post(
            "/analyze-cv",
            json={"cvText": cv_text, "linkedInURL": linkedin_url},
        )
        return CVAnalysis.model_validate(self._data(resp, "Failed to analyze CV"))

    async def search_jobs(self, cv_analysis: CVAnalysis, target_role: str, seniority: str) -> list[Job]:
        resp = await self._client.post(
            "/search-jobs",
            json={
                "cvAnalysis": cv_analysis.model_dump(by_alias=True),
                "targetRole": target_role,
                "seniority": seniority,
            },
        )
        data = self._data(resp, "Failed to search jobs")
        return [Job.model_validate(job) for job in data["jobs"]]

    async def generate_application(
        self,
        cv_text: str,
        job: JobSummary,
        candidate: CandidateInfo,
    ) -> GeneratedApplication:
        resp = await self._client.post(
            "/generate-applications",
            json={
                "cvText": cv_text,
                "job": job.model_dump(by_alias=True),
                "candidateInfo": candidate.model_dump(by_alias=True),
            },
        )
        return GeneratedApplication.model_validate(self._data(resp, "Failed to generate application"))

    # ── Helpers ─────────────────────────────────────────────────────────────

    @staticmethod
    def _data(resp: httpx.Response, fallback: str) -> Any:
        """Return the envelope's data, or raise with the server's error message."""
        if resp.is_error:
            try:
                message = resp.json().get("error") or fallback
            except ValueError:
                message = fallback
            logger.warning(f"{resp.request.method} {resp.request.url.path} -> {resp.status_code}: {message}")
            raise ApplyKitAPIError(message, status_code=resp.status_code)
        return resp.json()["data"]
