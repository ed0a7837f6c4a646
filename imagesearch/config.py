from typing import List

from pydantic_settings import BaseSettings

from imagesearch.version import __version__


class Settings(BaseSettings):
    # App
    APP_NAME: str = "imagesearch"
    APP_VERSION: str = __version__
    DEBUG: bool = False

    # Upstream search page
    SEARCH_URL: str = "https://www.google.com/search"
    # Google serves the AF_initDataCallback layout to this older desktop UA
    USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/88.0.4324.104 Safari/537.36"
    )
    HTTP_TIMEOUT: float = 30.0  # seconds

    # Embedded data location
    DATA_MARKER: str = "AF_initDataCallback"
    SCRIPT_CLOSE_MARKER: str = "</script>"
    # Width of the ", sideChannel: {}});" trailer between the array and </script>
    TRAILING_TRIM: int = 20

    # Downloads
    DOWNLOAD_DIR: str = "images"

    # CORS
    BACKEND_CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Sentry
    SENTRY_DSN: str = ""
    SENTRY_TRACES_SAMPLE_RATE: float = 0.2
    SENTRY_ENVIRONMENT: str = "development"

    # Logging
    LOG_FORMAT: str = "json"  # "json" for production, "text" for development
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
