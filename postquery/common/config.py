from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="POSTQUERY_", case_sensitive=False)

    # JSON list of {"id", "name"} used when a request carries no categories
    categories_path: str | None = None

    # result previews (0 = no truncation)
    title_preview_chars: int = 0
    excerpt_preview_chars: int = 150
    content_preview_chars: int = 450
    preview_ellipsis: str = "..."

    max_query_length: int = 1000


settings = Settings()
