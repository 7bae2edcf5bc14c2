from .app import build_processor, create_app

__all__ = ["build_processor", "create_app"]
