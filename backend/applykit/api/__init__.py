from applykit.api import (
    cv_routes,
    job_routes,
    application_routes,
    llm_routes,
)

__all__ = [
    "cv_routes",
    "job_routes",
    "application_routes",
    "llm_routes",
]
