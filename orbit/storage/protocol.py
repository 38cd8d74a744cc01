"""
GraphGateway Protocol Definition.

The editor core does no I/O itself. It only depends on this contract:
load the whole graph, save the whole graph. There is no partial or merge
persistence; every save replaces the stored document.
"""

from typing import Any, Dict, Protocol, runtime_checkable

from orbit.model import GraphModel


class PersistenceError(Exception):
    """Raised by gateways when the stored graph cannot be read."""


@runtime_checkable
class GraphGateway(Protocol):
    """
    Abstract protocol for graph storage.

    Both JsonFileGateway (local file) and HttpGateway (admin API) conform.
    """

    @property
    def backend_type(self) -> str:
        """Return the backend type identifier ('file' or 'http')."""
        ...

    def load(self) -> GraphModel:
        """
        Load the stored graph.

        Returns:
            The saved GraphModel, or a default document if nothing is stored yet.

        Raises:
            PersistenceError: if the store is unreachable or its content unreadable.
        """
        ...

    def save(self, model: GraphModel) -> Dict[str, Any]:
        """
        Replace the stored graph with ``model``.

        Returns:
            Dict with:
            - success: bool
            - message: str
        """
        ...
