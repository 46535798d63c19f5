from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Bookshelf Recommendations"
    app_version: str = "0.1.0"
    app_description: str = (
        "Track the books you have read and get recommendations from your ratings."
    )
    database_url: str = "sqlite:///./bookshelf.db"
    log_level: str = "INFO"
    log_format: str = "json"
    log_service_name: str = "bookshelf-api"

    google_books_base_url: str = "https://www.googleapis.com/books/v1/volumes"
    google_books_api_key: str | None = None
    search_timeout_seconds: float = 10.0
    search_cache_max_entries: int = 1024
    search_cache_ttl_seconds: float = 3600.0

    remote_store_url: str | None = None
    local_cache_key: str = "userBooks"

    debounce_ms: int = 300
    recommendation_limit: int = 5
    suggestion_limit: int = 5
    augmentation_max_results: int = 10
    min_query_length: int = 3

    model_config = SettingsConfigDict(
        env_prefix="BOOKSHELF_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
