from __future__ import annotations

import logging
import os

from fastapi import FastAPI


def _validate_env() -> None:
    """
    Validate all required environment variables at startup.

    Raises RuntimeError listing every missing or invalid variable so the
    operator can fix all problems in one restart cycle.
    """

    from app.config import load_env_files

    load_env_files()

    errors: list[str] = []

    # --- Reporting API token --------------------------------------------
    if not os.getenv("REPORTING_API_ACCESS_TOKEN", "").strip():
        errors.append(
            "REPORTING_API_ACCESS_TOKEN is not set. Provide an OAuth access token "
            "with read access to the analytics views being reported on."
        )

    # --- Paging limit ---------------------------------------------------
    max_pages = os.getenv("REPORTING_API_MAX_PAGES", "").strip()
    if max_pages and not max_pages.isdigit():
        errors.append(
            f"REPORTING_API_MAX_PAGES='{max_pages}' is not a positive integer."
        )

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="Web Vitals Report API",
        version="1.0.0",
    )

    from app.api.routers import web_vitals_router

    application.include_router(web_vitals_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
