from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Codec defaults, overridable through HLS_* environment variables."""

    # Reject unrecognized #EXT tags instead of skipping them
    strict: bool = True
    # Protocol version assumed when a playlist has no #EXT-X-VERSION tag
    default_version: int = 1

    class Config:
        env_prefix = "HLS_"


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
