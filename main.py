"""
Main entrypoint: run the Lingua FastAPI server with uvicorn.

Env: DATABASE_URL (or DATABASE_PATH), SESSION_SECRET, APP_ID, API_HOST, API_PORT, LOG_LEVEL.

Equivalent: uvicorn backend_lingua.api_server.app:app --host 0.0.0.0 --port 8000
"""

# Configure structured JSON logging before other imports that may log
from backend_lingua.lingua_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Validate config, then serve the API in the main thread."""
    from backend_lingua.config import get_settings
    from backend_lingua.config.env import mask_database_url

    settings = get_settings()
    if not settings.session_secret:
        logger.warning(
            "main_config_warning",
            message="SESSION_SECRET is not set: every authenticated request will be rejected",
        )
    logger.info(
        "main_config_loaded",
        database=mask_database_url(settings.database_url),
        notifications_enabled=bool(settings.app_id),
    )

    from backend_lingua.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
