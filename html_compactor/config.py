from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_dir: str | None = None

    # Parsing
    tree_parser: str = "lxml"

    # Size advisory (characters of compacted output)
    size_warning_chars: int = 100_000
    size_limit_chars: int = 500_000

    # HTTP
    request_timeout_s: int = 30
    max_request_chars: int = 20_000_000
    cors_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
