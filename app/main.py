import uvicorn

from app.config import get_settings
from app.logging_config import build_logging_config


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "app.api.app:app",
        host=settings.host,
        port=settings.port,
        log_config=build_logging_config(settings.log_level),
    )


if __name__ == "__main__":
    main()
