"""Factory functions for creating configured OAuth providers.

Enable/skip decisions are logged to ``idp_client.factory``; call
``idp_client.enable_logging()`` to see them.
"""
import logging
from typing import Any

from idp_client.core.config import BaseAppSettings, get_settings

from .providers import AbstractProvider, GenericProvider, GoogleProvider

logger = logging.getLogger(__name__)


def create_providers(settings: BaseAppSettings | None = None, **collaborators: Any) -> dict[str, AbstractProvider]:
    """
    Create every OAuth provider enabled by configuration.

    Args:
        settings: Settings to read (defaults to the cached application settings)
        **collaborators: transport, random_generator, grant_factory or
            redirect_handler shared by all providers

    Returns:
        Mapping of provider name to provider instance
    """
    settings = settings or get_settings()
    providers: dict[str, AbstractProvider] = {}

    # Register Google OAuth if configured
    if settings.GOOGLE_CLIENT_ID and settings.GOOGLE_CLIENT_SECRET:
        providers["google"] = GoogleProvider(
            client_id=settings.GOOGLE_CLIENT_ID,
            client_secret=settings.GOOGLE_CLIENT_SECRET,
            redirect_uri=settings.GOOGLE_REDIRECT_URI or "",
            **collaborators,
        )
        logger.info("Google OAuth provider enabled")
    else:
        logger.warning("Google OAuth not configured (missing client ID/secret)")

    urls = (settings.OAUTH_AUTHORIZE_URL, settings.OAUTH_TOKEN_URL, settings.OAUTH_USER_DETAILS_URL)
    if settings.OAUTH_CLIENT_ID and all(urls):
        providers["generic"] = GenericProvider(
            client_id=settings.OAUTH_CLIENT_ID,
            client_secret=settings.OAUTH_CLIENT_SECRET or "",
            redirect_uri=settings.OAUTH_REDIRECT_URI or "",
            url_authorize=settings.OAUTH_AUTHORIZE_URL,
            url_access_token=settings.OAUTH_TOKEN_URL,
            url_user_details=settings.OAUTH_USER_DETAILS_URL,
            default_scopes=settings.OAUTH_SCOPES,
            scope_separator=settings.OAUTH_SCOPE_SEPARATOR,
            http_method=settings.OAUTH_HTTP_METHOD,
            response_format=settings.OAUTH_RESPONSE_FORMAT,
            uid_key=settings.OAUTH_UID_KEY,
            **collaborators,
        )
        logger.info("Generic OAuth provider enabled")
    else:
        logger.warning("Generic OAuth not configured (missing client ID or endpoint URLs)")

    return providers


def get_provider(name: str, providers: dict[str, AbstractProvider]) -> AbstractProvider:
    """
    Get a configured provider by name.

    Raises:
        ValueError: If provider not configured
    """
    if name not in providers:
        raise ValueError(f"OAuth provider '{name}' not registered")
    return providers[name]
