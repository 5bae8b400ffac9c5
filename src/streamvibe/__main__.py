"""Run the Stream Vibe API under uvicorn: ``python -m streamvibe``."""

import uvicorn

from streamvibe.api.settings import get_settings

APP_IMPORT_PATH = "streamvibe.api.main:app"


def main() -> None:
    settings = get_settings()
    # log_config=None keeps the JSON handler installed by configure_logging
    uvicorn.run(
        APP_IMPORT_PATH,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        log_config=None,
    )


if __name__ == "__main__":
    main()
