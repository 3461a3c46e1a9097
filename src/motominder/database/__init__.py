from .base import Base
from .session import create_engine, create_session_factory, init_models

__all__ = ["Base", "create_engine", "create_session_factory", "init_models"]
