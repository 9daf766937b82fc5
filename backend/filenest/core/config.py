import os

from filenest.core.exceptions import ConfigurationError


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")


class Settings:
    def __init__(self):
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.ALGORITHM: str = os.getenv("ALGORITHM", "HS256")
        self.ACCESS_TOKEN_EXPIRE_MINUTES: int = _env_int("ACCESS_TOKEN_EXPIRE_MINUTES", 24 * 60)

        self.ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "")
        self.ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")

        self.DATA_DIR: str = os.getenv("DATA_DIR", os.path.abspath("."))
        self.UPLOADS_DIR: str = os.getenv("UPLOADS_DIR", os.path.join(self.DATA_DIR, "uploads"))
        self.NOTES_DIR: str = os.getenv("NOTES_DIR", os.path.join(self.DATA_DIR, "notes"))
        self.SHARE_LINKS_FILE: str = os.getenv(
            "SHARE_LINKS_FILE", os.path.join(self.DATA_DIR, "share-links.json")
        )
        self.STATIC_DIR: str = os.getenv("STATIC_DIR", os.path.join(self.DATA_DIR, "public"))

        self.MAX_FILE_SIZE: int = _env_int("MAX_FILE_SIZE", 50 * 1024 * 1024)
        self.NOTE_PREVIEW_LENGTH: int = _env_int("NOTE_PREVIEW_LENGTH", 100)

        # Empty means "derive from the incoming request".
        self.PUBLIC_BASE_URL: str = os.getenv("PUBLIC_BASE_URL", "")
        self.CORS_ORIGINS: list[str] = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
        self.HOST: str = os.getenv("HOST", "0.0.0.0")
        self.PORT: int = _env_int("PORT", 5000)

    def validate(self) -> None:
        """Fail fast when the server cannot run safely with the current settings."""
        problems = []
        if not self.SECRET_KEY:
            problems.append("SECRET_KEY is not set")
        if not self.ADMIN_USERNAME:
            problems.append("ADMIN_USERNAME is not set")
        if not self.ADMIN_PASSWORD:
            problems.append("ADMIN_PASSWORD is not set")
        if self.ACCESS_TOKEN_EXPIRE_MINUTES <= 0:
            problems.append("ACCESS_TOKEN_EXPIRE_MINUTES must be positive")
        if self.MAX_FILE_SIZE <= 0:
            problems.append("MAX_FILE_SIZE must be positive")
        if self.NOTE_PREVIEW_LENGTH < 0:
            problems.append("NOTE_PREVIEW_LENGTH must not be negative")
        if problems:
            raise ConfigurationError("; ".join(problems))


settings = Settings()
