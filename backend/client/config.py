import os

DEFAULT_API_URL = "http://localhost:5000"


def get_api_url() -> str:
    """Base URL of the API, from ``FOODHUB_API_URL``"""
    return os.getenv("FOODHUB_API_URL", DEFAULT_API_URL).rstrip("/")
