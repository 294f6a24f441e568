"""Routing adapters - Implementations of RoutingServicePort.

Available implementations:
- GoogleDistanceMatrixAdapter: Google Maps Distance Matrix API
"""

from .google_distance_matrix import (
    GoogleDistanceMatrixAdapter,
    parse_distance_matrix_response,
)

__all__ = ["GoogleDistanceMatrixAdapter", "parse_distance_matrix_response"]
