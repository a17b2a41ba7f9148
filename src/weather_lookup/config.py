import logging
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from src.weather_lookup.services.geoapify_client_async import GEOAPIFY_API_URL
from src.weather_lookup.services.open_meteo_client_async import (
    OPEN_METEO_API_URL,
    OPEN_METEO_ARCHIVE_URL,
)
from src.weather_lookup.services.secrets_manager_service_async import (
    AsyncSecretsManagerService,
)
from src.weather_lookup.services.youtube_client_async import YOUTUBE_API_URL
from src.weather_lookup.utils.common import get_env_var, split_csv

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///./weather_lookup.db"


class Settings(BaseModel):
    """Process configuration, read once at startup."""

    geoapify_api_key: str = ""
    youtube_api_key: str = ""
    database_url: str = DEFAULT_DATABASE_URL

    geoapify_api_url: str = GEOAPIFY_API_URL
    open_meteo_api_url: str = OPEN_METEO_API_URL
    open_meteo_archive_url: str = OPEN_METEO_ARCHIVE_URL
    youtube_api_url: str = YOUTUBE_API_URL

    http_timeout_seconds: float = Field(default=10.0, gt=0)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Secrets Manager secret holding {"geoapify": ..., "youtube": ...}
    secret_name_api: str = ""


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build `Settings` from the environment.

    Values from a `.env` file are loaded first without overriding variables
    already set in the process environment.

    Args:
        env_file (Optional[str]): Explicit dotenv path; defaults to `.env`
            discovery.

    Returns:
        Settings: Parsed configuration.
    """
    load_dotenv(env_file, override=False)
    return Settings(
        geoapify_api_key=get_env_var("GEOAPIFY_API_KEY", ""),
        youtube_api_key=get_env_var("YOUTUBE_API_KEY", ""),
        database_url=get_env_var("DATABASE_URL", DEFAULT_DATABASE_URL),
        geoapify_api_url=get_env_var("GEOAPIFY_API_URL", GEOAPIFY_API_URL),
        open_meteo_api_url=get_env_var(
            "OPEN_METEO_API_URL", OPEN_METEO_API_URL
        ),
        open_meteo_archive_url=get_env_var(
            "OPEN_METEO_ARCHIVE_URL", OPEN_METEO_ARCHIVE_URL
        ),
        youtube_api_url=get_env_var("YOUTUBE_API_URL", YOUTUBE_API_URL),
        http_timeout_seconds=float(get_env_var("HTTP_TIMEOUT_SECONDS", "10")),
        cors_origins=split_csv(get_env_var("CORS_ORIGINS", "*")),
        secret_name_api=get_env_var("SECRET_NAME_API", ""),
    )


async def resolve_api_keys(
    settings: Settings,
    secrets_manager: Optional[AsyncSecretsManagerService] = None,
) -> Settings:
    """Fill missing provider keys from AWS Secrets Manager.

    Keys already present in the environment win. Nothing is fetched when
    `SECRET_NAME_API` is not configured.

    Args:
        settings (Settings): Settings loaded from the environment.
        secrets_manager (Optional[AsyncSecretsManagerService]): Client to
            use; a new one is created when omitted.

    Returns:
        Settings: A copy of `settings` with keys filled in.
    """
    if not settings.secret_name_api:
        return settings
    if settings.geoapify_api_key and settings.youtube_api_key:
        return settings

    secrets_manager = secrets_manager or AsyncSecretsManagerService()
    secrets_api = await secrets_manager.get_secret(settings.secret_name_api)
    logger.info(f"🔑 Loaded API keys from {settings.secret_name_api}")

    return settings.model_copy(
        update={
            "geoapify_api_key": settings.geoapify_api_key
            or str(secrets_api.get("geoapify") or ""),
            "youtube_api_key": settings.youtube_api_key
            or str(secrets_api.get("youtube") or ""),
        }
    )
