from .kv import KVEntry

__all__ = ["KVEntry"]
