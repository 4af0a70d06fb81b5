from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # e.g. mongodb://localhost:27017/notestore, the path names the database
    notes_collection: str = "notes"
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    model_config = {
        "env_file": [".env"],
        "env_prefix": "NOTESTORE_",
        "extra": "ignore",
    }
