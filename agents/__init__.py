"""Reply post-processing agents."""

from .reply_polisher import ReplyPolisher

__all__ = [
    "ReplyPolisher",
]
