from pydantic_settings import BaseSettings


class LoggingSettings(BaseSettings):
    """
    Logging settings.
    Loaded automatically from .env with prefix BPM_LOG_*
    """

    level: str = "INFO"
    format: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "BPM_LOG_",
        "extra": "ignore",
    }
