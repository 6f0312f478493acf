from .session_collection import SessionCollection

__all__ = ["SessionCollection"]
