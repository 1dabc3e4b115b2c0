"""Request compilation: parameters in, JSON2Video request bodies out."""

from typing import Any, Callable, Dict

from ..params import ParameterSource
from .create_movie import build_create_movie_request_body
from .errors import ElementProcessingError, ElementValidationError
from .merge_video_audio import build_merge_video_audio_request_body
from .merge_videos import build_merge_videos_request_body
from .processor import process_element
from .scenes import assemble_scene
from .validators import validate_element, validate_elements

BUILDERS: Dict[str, Callable[[ParameterSource, int], Dict[str, Any]]] = {
    "createMovie": build_create_movie_request_body,
    "mergeVideoAudio": build_merge_video_audio_request_body,
    "mergeVideos": build_merge_videos_request_body,
}


def build_request_body(operation: str, params: ParameterSource, item_index: int = 0) -> Dict[str, Any]:
    """Compile the request body for an operation.

    Raises:
        ValueError: If the operation is not supported.
    """
    builder = BUILDERS.get(operation)
    if builder is None:
        raise ValueError(f"Unsupported operation: {operation}")
    return builder(params, item_index)


__all__ = [
    "BUILDERS",
    "ElementProcessingError",
    "ElementValidationError",
    "assemble_scene",
    "build_create_movie_request_body",
    "build_merge_video_audio_request_body",
    "build_merge_videos_request_body",
    "build_request_body",
    "process_element",
    "validate_element",
    "validate_elements",
]
