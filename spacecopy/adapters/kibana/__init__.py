"""Kibana adapters for copying saved objects between spaces."""

from .spaces import KibanaAPIError, KibanaSpacesAdapter

__all__ = ["KibanaAPIError", "KibanaSpacesAdapter"]
