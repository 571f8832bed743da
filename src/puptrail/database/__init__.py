from .base import Base
from .session import Store, create_store_engine, init_store, make_session_factory, session_scope

__all__ = [
    "Base",
    "Store",
    "create_store_engine",
    "init_store",
    "make_session_factory",
    "session_scope",
]
