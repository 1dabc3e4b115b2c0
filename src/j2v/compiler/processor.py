"""Element processor: raw workflow elements to API elements."""

from typing import Any, Dict, Mapping, Optional, Tuple

from .fields import (
    POSITIONED_KINDS,
    KIND_FIELDS,
    apply_field_maps,
    fields_for,
    to_number,
)


# Preset name -> API position string
POSITION_PRESETS = {
    "center": "center-center",
    "top_left": "top-left",
    "top_center": "top-center",
    "top_right": "top-right",
    "middle_left": "center-left",
    "middle_right": "center-right",
    "bottom_left": "bottom-left",
    "bottom_center": "bottom-center",
    "bottom_right": "bottom-right",
}

API_POSITIONS = set(POSITION_PRESETS.values()) | {"custom"}


def map_position_preset(preset: Any) -> str:
    """Map a position preset to the API position format.

    Unknown presets map to ``center-center``.
    """
    if not isinstance(preset, str):
        return "center-center"
    return POSITION_PRESETS.get(preset, "center-center")


def calculate_position_from_preset(
    preset: str,
    width: Optional[float],
    height: Optional[float],
    element_width: Optional[float] = None,
    element_height: Optional[float] = None,
) -> Tuple[float, float]:
    """Calculate canvas coordinates for a position preset.

    Args:
        preset: Preset name, e.g. ``top_left``.
        width: Canvas width; defaults to 1024 when falsy.
        height: Canvas height; defaults to 768 when falsy.
        element_width: Element width used to inset edge presets.
        element_height: Element height used to inset edge presets.

    Returns:
        The (x, y) coordinates. Unknown presets resolve to the canvas centre.
    """
    canvas_w = width or 1024
    canvas_h = height or 768
    offset_x = element_width / 2 if element_width else 50
    offset_y = element_height / 2 if element_height else 50

    coordinates = {
        "center": (canvas_w / 2, canvas_h / 2),
        "top_left": (offset_x, offset_y),
        "top_center": (canvas_w / 2, offset_y),
        "top_right": (canvas_w - offset_x, offset_y),
        "middle_left": (offset_x, canvas_h / 2),
        "middle_right": (canvas_w - offset_x, canvas_h / 2),
        "bottom_left": (offset_x, canvas_h - offset_y),
        "bottom_center": (canvas_w / 2, canvas_h - offset_y),
        "bottom_right": (canvas_w - offset_x, canvas_h - offset_y),
    }
    return coordinates.get(preset, (canvas_w / 2, canvas_h / 2))


def _apply_positioning(
    element: Mapping[str, Any],
    processed: Dict[str, Any],
    target_width: Optional[float],
    target_height: Optional[float],
) -> None:
    position = element.get("position")
    if isinstance(position, str) and position in POSITION_PRESETS:
        x, y = calculate_position_from_preset(
            position,
            target_width,
            target_height,
            to_number(element.get("width")),
            to_number(element.get("height")),
        )
        processed["x"] = x
        processed["y"] = y
        processed["position"] = map_position_preset(position)
        return

    if isinstance(position, str) and position in API_POSITIONS:
        processed["position"] = position
    if element.get("x") is not None:
        processed["x"] = element["x"]
    if element.get("y") is not None:
        processed["y"] = element["y"]


def process_text_element(element: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a text element; styling goes into a kebab-case ``settings`` object.

    ``settings`` is omitted entirely when no styling field is present.
    """
    processed: Dict[str, Any] = {"type": "text"}
    processed.update(apply_field_maps(dict(element), fields_for("text")))
    return processed


def process_subtitle_element(element: Mapping[str, Any]) -> Dict[str, Any]:
    """Convert a movie-level subtitles element.

    ``captions`` starting with ``http`` becomes ``src``, anything else
    becomes inline ``text``. Explicit ``text``/``src`` are kept as fallbacks.
    ``language`` defaults to ``en`` and ``model`` to ``default``.
    """
    processed: Dict[str, Any] = {"type": "subtitles"}

    captions = element.get("captions")
    if isinstance(captions, str) and captions:
        if captions.startswith("http"):
            processed["src"] = captions
        else:
            processed["text"] = captions

    mapped = apply_field_maps(dict(element), fields_for("subtitles"))
    for key in ("text", "src"):
        if key in processed:
            mapped.pop(key, None)
    processed.update(mapped)
    processed.setdefault("language", "en")
    processed.setdefault("model", "default")
    return processed


def process_element(
    element: Mapping[str, Any],
    target_width: Optional[float],
    target_height: Optional[float],
) -> Dict[str, Any]:
    """Convert one raw element into the API element shape.

    Args:
        element: Raw element with camelCase workflow fields.
        target_width: Canvas width, used to resolve position presets.
        target_height: Canvas height, used to resolve position presets.

    Returns:
        A new dict in the API element shape.

    Raises:
        ValueError: If the element type has no field mapping.
    """
    element_type = element.get("type")
    if element_type == "text" or (not element_type and "text" in element):
        return process_text_element(element)
    if element_type == "subtitles":
        return process_subtitle_element(element)
    if element_type not in KIND_FIELDS:
        raise ValueError(f"Unsupported element type: {element_type}")

    processed: Dict[str, Any] = {"type": element_type}
    processed.update(apply_field_maps(dict(element), fields_for(element_type)))
    if element_type in POSITIONED_KINDS:
        _apply_positioning(element, processed, target_width, target_height)
    return processed
