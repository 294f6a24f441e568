from .tables import read_coordinates, save_results

__all__ = ["read_coordinates", "save_results"]
