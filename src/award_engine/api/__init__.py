"""HTTP surface for the award engine."""

from award_engine.api.app import create_app

__all__ = ["create_app"]
