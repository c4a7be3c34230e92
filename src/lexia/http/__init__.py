"""HTTP client for the Lexia backend API."""

from lexia.http.client import APIClient

__all__ = ["APIClient"]
