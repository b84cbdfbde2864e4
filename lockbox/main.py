# lockbox/main.py
import uvicorn

from lockbox.app.core.config import settings


def run() -> None:
    """Serve the API with uvicorn (console script `lockbox`)."""
    uvicorn.run(
        "lockbox.app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=not settings.is_production,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
