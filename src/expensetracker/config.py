from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 5000
    debug: bool = False
    token_secret_key: str  # HMAC key for session tokens; rotating it logs everyone out
    token_ttl_seconds: int = 3600
    bcrypt_rounds: int = 12
    cors_origins: list[str] = []

    model_config = {
        "env_file": [".env"],
        "env_prefix": "EXPENSETRACKER_",
        "extra": "ignore",
    }
