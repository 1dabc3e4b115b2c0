"""Request builder for the mergeVideoAudio operation.

The movie has exactly one scene holding the video, the audio track and any
scene text. Unlike the other builders, a video or audio element that cannot
be converted fails the whole build.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..models import RequestBody, Scene
from ..params import ParameterSource, get_collection, lookup
from . import shared
from .aggregator import validate_collection
from .errors import ElementProcessingError
from .validators import validate_scene_element, validate_text_element

logger = logging.getLogger(__name__)


def _processing_error(kind: str, error: Exception) -> ElementProcessingError:
    return ElementProcessingError(f"{kind} element processing failed: {str(error) or 'Unknown error'}")


def read_media_element(
    params: ParameterSource,
    name: str,
    element_type: str,
    item_index: int,
) -> Optional[Dict[str, Any]]:
    """Read a single video or audio details object.

    Returns:
        The element with its type defaulted, or None if nothing was given.

    Raises:
        ElementProcessingError: If the parameter cannot be read.
    """
    result = lookup(params, name, item_index, {})
    if not result.ok:
        raise _processing_error(element_type.capitalize(), result.error)
    value = result.value
    if not isinstance(value, Mapping) or not value:
        return None
    return {"type": element_type, **value}


def read_text_elements(params: ParameterSource, item_index: int) -> List[Any]:
    """Read ``textElements.textDetails``; a source error is not recoverable here."""
    result = lookup(params, "textElements.textDetails", item_index, [])
    if not result.ok:
        raise result.error
    if isinstance(result.value, (list, tuple)):
        return list(result.value)
    return []


def _convert_media(
    kind: str,
    convert: Any,
    element: Optional[Dict[str, Any]],
    body: RequestBody,
) -> List[Dict[str, Any]]:
    if element is None:
        return []
    try:
        return convert([element], body)
    except Exception as e:
        raise _processing_error(kind, e) from e


def process_merge_video_audio_scene(
    params: ParameterSource,
    body: RequestBody,
    item_index: int,
) -> Scene:
    """Build the single scene: video, audio, scene text, then text elements.

    Raises:
        ElementValidationError: If any element fails validation.
        ElementProcessingError: If the video or audio cannot be converted.
    """
    video = read_media_element(params, "videoElement", "video", item_index)
    audio = read_media_element(params, "audioElement", "audio", item_index)
    scene_text = get_collection(params, "sceneTextElements.textDetails", item_index)
    text_elements = read_text_elements(params, item_index)

    media = [element for element in (video, audio) if element is not None]
    validate_collection(media, validate_scene_element, "Scene element")
    validate_collection(scene_text, validate_text_element, "Scene text element")
    validate_collection(text_elements, validate_text_element, "Text element")

    elements: List[Dict[str, Any]] = []
    elements.extend(_convert_media("Video", shared.process_video_elements, video, body))
    elements.extend(_convert_media("Audio", shared.process_audio_elements, audio, body))
    elements.extend(shared.convert_text_elements(scene_text, "Scene text element"))
    elements.extend(shared.convert_text_elements(text_elements, "Text element"))
    return Scene(elements=elements)


def build_merge_video_audio_request_body(
    params: ParameterSource,
    item_index: int = 0,
) -> Dict[str, Any]:
    """Compile a mergeVideoAudio request body.

    Args:
        params: Source of the workflow parameters.
        item_index: Workflow item to compile.

    Returns:
        The request body as a JSON-ready dict, always with exactly one scene.

    Raises:
        ElementValidationError: If an element fails validation.
        ElementProcessingError: If the video or audio cannot be converted.
    """
    body = shared.initialize_request_body(params, item_index)
    shared.add_common_parameters(params, body, item_index)

    movie_elements = shared.process_all_movie_elements(params, body, item_index)
    scene = process_merge_video_audio_scene(params, body, item_index)
    logger.debug(f"Compiled mergeVideoAudio item {item_index}: {len(scene.elements)} scene elements")

    shared.process_output_settings(params, body, item_index)
    shared.process_export_settings(params, body, item_index)

    return shared.finalize_request_body(body, [scene], movie_elements)
