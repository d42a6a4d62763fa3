from .app import app, cli

__all__ = ["app", "cli"]
