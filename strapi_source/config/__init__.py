"""
Configuration Management.

Configuration sources (in order of precedence):
1. Environment variables (``STRAPI_`` prefix)
2. .env file
3. Default values

Example:
    from strapi_source.config import get_settings

    settings = get_settings()
    api_url = settings.api_url
"""

from strapi_source.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
