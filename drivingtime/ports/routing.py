"""Routing port - Abstraction over the external routing service.

This protocol defines the narrow contract the batch service depends on:
one origin, one destination, one normalized result. The service behind
it may support many origins and destinations per call; that capability
is not used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import RouteRequest, RouteResult


class RoutingServicePort(Protocol):
    """Port for single-route travel time and distance lookups.

    Implementation: adapters/routing/google_distance_matrix.py
    """

    def route(self, request: RouteRequest, api_key: str) -> RouteResult:
        """Resolve travel time and distance for one route.

        Args:
            request: Origin, destination, mode and optional departure.
            api_key: Credential for the routing service.

        Returns:
            RouteResult with status "OK" and both measures, or a non-OK
            status reported by the service and no measures.

        Raises:
            RoutingError: On transport failures or malformed responses.
        """
        ...
