"""Scene assembly.

A raw scene carries two element collections: the mixed "traditional"
elements under ``elements.elementValues`` and the text elements under
``textElements.textDetails``. Assembly runs in two phases. Both collections
are validated first and any invalid entry aborts the build; then every
element is converted, and an element that fails conversion is logged and
dropped without affecting its siblings.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..models import Scene, Transition
from .aggregator import validate_collection
from .fields import to_number
from .processor import process_element
from .shared import convert_text_elements
from .validators import validate_scene_element, validate_text_element

logger = logging.getLogger(__name__)

DEFAULT_BACKGROUND = "#000000"


def scene_collection(raw_scene: Mapping[str, Any], collection: str, key: str) -> List[Any]:
    """Return ``raw_scene[collection][key]`` as a list, or an empty list."""
    container = raw_scene.get(collection)
    if not isinstance(container, Mapping):
        return []
    items = container.get(key)
    if isinstance(items, (list, tuple)):
        return list(items)
    return []


def positive_number(value: Any) -> Optional[float]:
    """Return the value as a number if it is strictly positive."""
    number = to_number(value)
    if number is not None and number > 0:
        return number
    return None


def build_transition(
    style: Any,
    duration: Any,
    scene_index: int,
) -> Optional[Transition]:
    """Build the entry transition for a scene.

    The first scene never has one, and ``none`` disables it.
    """
    if scene_index < 1 or not style or style == "none":
        return None
    return Transition(style=style, duration=positive_number(duration))


def apply_scene_metadata(raw_scene: Mapping[str, Any], scene: Scene, scene_index: int) -> None:
    """Copy duration, background, comment and transition onto the scene."""
    scene.duration = positive_number(raw_scene.get("duration"))

    background = raw_scene.get("background-color")
    if background and background != DEFAULT_BACKGROUND:
        scene.background_color = background

    comment = raw_scene.get("comment")
    if isinstance(comment, str) and comment.strip():
        scene.comment = comment.strip()

    scene.transition = build_transition(
        raw_scene.get("transition_style"),
        raw_scene.get("transition_duration"),
        scene_index,
    )


def process_scene_elements(
    elements: List[Any],
    target_width: Optional[float],
    target_height: Optional[float],
) -> List[Dict[str, Any]]:
    """Convert validated scene elements; failures are logged and skipped."""
    processed: List[Dict[str, Any]] = []
    for element in elements:
        try:
            processed.append(process_element(element, target_width, target_height))
        except Exception as e:
            logger.warning(f"Failed to process scene element: {e}")
    return processed


def assemble_scene(
    raw_scene: Mapping[str, Any],
    target_width: Optional[float],
    target_height: Optional[float],
    scene_index: int = 0,
) -> Scene:
    """Assemble one scene from its raw parameters.

    Args:
        raw_scene: Scene parameters as supplied by the workflow.
        target_width: Canvas width, for position presets.
        target_height: Canvas height, for position presets.
        scene_index: Position of the scene in the movie (0-based).

    Returns:
        The scene, with traditional elements first and text elements after.

    Raises:
        ElementValidationError: If a text or traditional element is invalid.
    """
    if not isinstance(raw_scene, Mapping):
        raw_scene = {}

    traditional = scene_collection(raw_scene, "elements", "elementValues")
    text_elements = scene_collection(raw_scene, "textElements", "textDetails")

    validate_collection(text_elements, validate_text_element, "Scene text element")
    validate_collection(traditional, validate_scene_element, "Scene element")

    elements = process_scene_elements(traditional, target_width, target_height)
    elements.extend(convert_text_elements(text_elements, "Scene text element"))

    scene = Scene(elements=elements)
    apply_scene_metadata(raw_scene, scene, scene_index)
    return scene
