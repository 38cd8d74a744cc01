"""
Storage gateways for the expertise graph.

Supports multiple backends:
- JsonFileGateway: single local JSON document (default)
- HttpGateway: the portfolio's admin API
"""

from orbit.storage.protocol import GraphGateway, PersistenceError
from orbit.storage.file_backend import JsonFileGateway
from orbit.storage.http_backend import HttpGateway
from orbit.storage.factory import create_gateway, get_backend_type

__all__ = [
    'GraphGateway',
    'PersistenceError',
    'JsonFileGateway',
    'HttpGateway',
    'create_gateway',
    'get_backend_type',
]
