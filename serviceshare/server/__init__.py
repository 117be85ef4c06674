from .notify_routes import build_notify_router

__all__ = ["build_notify_router"]
