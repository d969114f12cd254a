from .time import from_epoch

__all__ = [
    "from_epoch",
]
