"""
Start the API with uvicorn::

    python -m blog_api

Host and port come from ``HOST`` / ``PORT`` (see ``blog_api.config``).
"""
import uvicorn

from blog_api.config import settings


def main() -> None:
    uvicorn.run(
        "blog_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.APP_ENV == "development" and settings.DEBUG,
    )


if __name__ == "__main__":
    main()
