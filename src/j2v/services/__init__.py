"""External service integrations."""

from .json2video import Json2VideoClient

__all__ = ["Json2VideoClient"]
