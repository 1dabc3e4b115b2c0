"""Request builder for the mergeVideos operation.

Each entry of ``videoElements.videoDetails`` becomes one scene that plays the
video, followed by the entry's own text elements and extra elements. Every
scene after the first may open with a transition.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..models import RequestBody, Scene
from ..params import ParameterSource, get_collection, lookup
from .aggregator import validate_collection
from .fields import media_duration, to_number, SKIP
from .scenes import build_transition, process_scene_elements, scene_collection
from .shared import (
    add_common_parameters,
    convert_text_elements,
    finalize_request_body,
    initialize_request_body,
    process_all_movie_elements,
    process_export_settings,
    process_output_settings,
)
from .validators import validate_scene_element, validate_text_element

logger = logging.getLogger(__name__)


def build_video_element(video: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Build the scene's video element, or None when there is no ``src``.

    Out of range timing, speed and volume values are dropped.
    """
    src = video.get("src")
    if not isinstance(src, str) or not src.strip():
        return None

    element: Dict[str, Any] = {"type": "video", "src": src.strip()}

    start = to_number(video.get("start"))
    if start is not None and start >= 0:
        element["start"] = start

    if video.get("duration") is not None:
        duration = media_duration(video["duration"])
        if duration is not SKIP:
            element["duration"] = duration

    speed = to_number(video.get("speed"))
    if speed is not None and speed > 0:
        element["speed"] = speed

    volume = to_number(video.get("volume"))
    if volume is not None and 0 <= volume <= 1:
        element["volume"] = volume

    return element


def _override(video: Mapping[str, Any], key: str, default: Any) -> Any:
    value = video.get(key)
    return default if value is None or value == "" else value


def assemble_video_scene(
    video: Mapping[str, Any],
    index: int,
    body: RequestBody,
    transition_style: Any,
    transition_duration: Any,
) -> Scene:
    """Assemble the scene for one video entry.

    Raises:
        ElementValidationError: If the entry's text, subtitle or extra
            elements are invalid. Subtitles always are.
    """
    text_elements = scene_collection(video, "textElements", "textDetails")
    subtitles = scene_collection(video, "subtitleElements", "subtitleDetails")
    extra = scene_collection(video, "elements", "elementValues")

    validate_collection(text_elements, validate_text_element, "Scene text element")
    validate_collection(
        [{**subtitle, "type": "subtitles"} if isinstance(subtitle, Mapping) else subtitle
         for subtitle in subtitles],
        validate_scene_element,
        "Scene subtitle",
        item_label="Element",
    )
    validate_collection(extra, validate_scene_element, "Scene element")

    elements: List[Dict[str, Any]] = []
    video_element = build_video_element(video)
    if video_element is not None:
        elements.append(video_element)
    elements.extend(convert_text_elements(text_elements, "Scene text element"))
    elements.extend(process_scene_elements(extra, body.width, body.height))

    return Scene(
        elements=elements,
        transition=build_transition(
            _override(video, "transition_style", transition_style),
            _override(video, "transition_duration", transition_duration),
            index,
        ),
    )


def process_merge_videos_scenes(
    params: ParameterSource,
    body: RequestBody,
    item_index: int,
) -> List[Scene]:
    """Build one scene per video entry."""
    videos = get_collection(params, "videoElements.videoDetails", item_index)
    transition_style = lookup(params, "transition", item_index, "none").value_or("none")
    transition_duration = lookup(params, "transitionDuration", item_index, 1).value_or(1)

    return [
        assemble_video_scene(
            video if isinstance(video, Mapping) else {},
            index,
            body,
            transition_style,
            transition_duration,
        )
        for index, video in enumerate(videos)
    ]


def build_merge_videos_request_body(params: ParameterSource, item_index: int = 0) -> Dict[str, Any]:
    """Compile a mergeVideos request body.

    Args:
        params: Source of the workflow parameters.
        item_index: Workflow item to compile.

    Returns:
        The request body as a JSON-ready dict.

    Raises:
        ElementValidationError: If a movie or scene element is invalid.
    """
    body = initialize_request_body(params, item_index)
    add_common_parameters(params, body, item_index)

    movie_elements = process_all_movie_elements(params, body, item_index, include_subtitles=True)
    scenes = process_merge_videos_scenes(params, body, item_index)
    logger.debug(f"Compiled mergeVideos item {item_index}: {len(scenes)} scenes")

    process_output_settings(params, body, item_index)
    process_export_settings(params, body, item_index)

    return finalize_request_body(body, scenes, movie_elements)
