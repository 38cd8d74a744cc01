"""
Gateway Factory.

Creates the appropriate storage gateway from resolved settings.
"""

import logging
from typing import Optional

from orbit.config import DEFAULT_BACKEND, Settings, get_settings
from orbit.paths import get_default_graph_path
from orbit.storage.file_backend import JsonFileGateway
from orbit.storage.http_backend import HttpGateway
from orbit.storage.protocol import GraphGateway

logger = logging.getLogger(__name__)


def get_backend_type(settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    return settings.storage_backend or DEFAULT_BACKEND


def create_gateway(settings: Optional[Settings] = None,
                   force_backend: Optional[str] = None) -> GraphGateway:
    """
    Create a storage gateway.

    Args:
        settings: Resolved settings (read from env/config.json when omitted)
        force_backend: Override the configured backend type

    Returns:
        JsonFileGateway or HttpGateway
    """
    settings = settings or get_settings()
    backend_type = force_backend or get_backend_type(settings)

    if backend_type == "http":
        if not settings.api_url:
            raise ValueError("The http backend requires api_url (ORBIT_API_URL)")
        return HttpGateway(base_url=settings.api_url, token=settings.admin_token)

    if backend_type != "file":
        logger.warning(f"Unknown storage backend '{backend_type}', falling back to file")
    return JsonFileGateway(settings.data_path or get_default_graph_path())
