from .buffer import WindowBuffer

__all__ = ["WindowBuffer"]
