"""HTTP JSON API for tokobook."""

from tokobook.api.app import create_app

__all__ = ["create_app"]
