"""FastAPI routers acting as controllers in the MVC architecture."""

from . import animation, health, model_config

__all__ = ["animation", "health", "model_config"]
