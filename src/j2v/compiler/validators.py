"""Element validators.

Each ``validate_*`` function checks one element of a given kind and returns a
``ValidationResult``. Elements are the raw parameter mappings supplied by the
workflow (camelCase field names), before any conversion to the API shape.
"""

import re
from typing import Any, Callable, Dict, List, Mapping

from ..models import ValidationResult

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")

FIT_VALUES = ["cover", "contain", "fill", "scale-down", "none"]

TEXT_POSITIONS = [
    "top-left", "top-center", "top-right",
    "center-left", "center-center", "center-right",
    "bottom-left", "bottom-center", "bottom-right",
    "custom",
]

FONT_WEIGHTS = [
    "100", "200", "300", "400", "500", "600", "700", "800", "900",
    "normal", "bold",
]

SHAPE_TYPES = ["rectangle", "circle", "arrow", "line"]

SCENE_SUBTITLE_ERROR = (
    "Subtitles can only be added at movie level, not in individual scenes. "
    "Please move this subtitle to the Movie Elements section."
)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return not value or (isinstance(value, str) and value.strip() == "")


def _is_hex_color(value: Any) -> bool:
    return isinstance(value, str) and HEX_COLOR.match(value) is not None


def _check_required_string(
    element: Mapping[str, Any], key: str, label: str, errors: List[str]
) -> None:
    value = element.get(key)
    if _is_blank(value):
        errors.append(f"{label} element must have a {key} property")
    elif not isinstance(value, str):
        errors.append(f"{label} element {key} must be a string")


def _check_range(
    element: Mapping[str, Any],
    key: str,
    low: float,
    high: float,
    message: str,
    errors: List[str],
) -> None:
    if key in element:
        value = element[key]
        if not _is_number(value) or value < low or value > high:
            errors.append(message)


def validate_base_element(element: Any) -> ValidationResult:
    """Check that the element exists and is a mapping."""
    if element is None or (not isinstance(element, Mapping) and not element):
        return ValidationResult.failure("Element is null or undefined")
    if not isinstance(element, Mapping):
        return ValidationResult.failure("Element must be an object")
    return ValidationResult()


def validate_video_element(element: Any) -> ValidationResult:
    """Validate a video element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    if element.get("type") != "video":
        errors.append('Video element must have type "video"')
    _check_required_string(element, "src", "Video", errors)

    if "duration" in element:
        if not _is_number(element["duration"]) or element["duration"] < 0:
            errors.append("Video duration must be a positive number")
    if "start" in element:
        if not _is_number(element["start"]) or element["start"] < 0:
            errors.append("Video start time must be a positive number")
    _check_range(element, "volume", 0, 1,
                 "Video volume must be a number between 0 and 1", errors)
    if "speed" in element:
        if not _is_number(element["speed"]) or element["speed"] <= 0:
            errors.append("Video speed must be a positive number")
    if "fit" in element and element["fit"] not in FIT_VALUES:
        errors.append(f"Video fit must be one of: {', '.join(FIT_VALUES)}")

    return ValidationResult.from_messages(errors)


def validate_audio_element(element: Any) -> ValidationResult:
    """Validate an audio element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    if element.get("type") != "audio":
        errors.append('Audio element must have type "audio"')
    _check_required_string(element, "src", "Audio", errors)

    _check_range(element, "volume", 0, 1,
                 "Audio volume must be a number between 0 and 1", errors)
    if "duration" in element:
        if not _is_number(element["duration"]) or element["duration"] < 0:
            errors.append("Audio duration must be a positive number")
    if "start" in element:
        if not _is_number(element["start"]) or element["start"] < 0:
            errors.append("Audio start time must be a positive number")

    return ValidationResult.from_messages(errors)


def validate_text_element(element: Any) -> ValidationResult:
    """Validate a text element.

    A ``custom`` position without both coordinates is a warning, not an error.
    """
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []
    warnings: List[str] = []

    _check_required_string(element, "text", "Text", errors)

    if "style" in element and not isinstance(element["style"], str):
        errors.append("Text element style must be a string")

    if "position" in element:
        if element["position"] not in TEXT_POSITIONS:
            errors.append(f"Text position must be one of: {', '.join(TEXT_POSITIONS)}")
        if element["position"] == "custom" and ("x" not in element or "y" not in element):
            warnings.append("Custom positioned text should have x and y coordinates")

    if "x" in element and not _is_number(element["x"]):
        errors.append("Text x coordinate must be a number")
    if "y" in element and not _is_number(element["y"]):
        errors.append("Text y coordinate must be a number")

    if "start" in element:
        if not _is_number(element["start"]) or element["start"] < 0:
            errors.append("Text start time must be a positive number")
    if "duration" in element:
        if not _is_number(element["duration"]) or element["duration"] <= 0:
            errors.append("Text duration must be a positive number")

    if "fontSize" in element:
        font_size = element["fontSize"]
        if not isinstance(font_size, str) and not _is_number(font_size):
            errors.append("Text fontSize must be a string or number")
    if "fontWeight" in element and str(element["fontWeight"]) not in FONT_WEIGHTS:
        errors.append(f"Text fontWeight must be one of: {', '.join(FONT_WEIGHTS)}")

    if "fontColor" in element and not _is_hex_color(element["fontColor"]):
        errors.append("Text fontColor must be a valid hex color (e.g., #FFFFFF)")
    if "backgroundColor" in element and not _is_hex_color(element["backgroundColor"]):
        errors.append("Text backgroundColor must be a valid hex color (e.g., #000000)")

    return ValidationResult.from_messages(errors, warnings)


def validate_image_element(element: Any) -> ValidationResult:
    """Validate an image element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    if element.get("type") != "image":
        errors.append('Image element must have type "image"')
    _check_required_string(element, "src", "Image", errors)

    if "fit" in element and element["fit"] not in FIT_VALUES:
        errors.append(f"Image fit must be one of: {', '.join(FIT_VALUES)}")

    return ValidationResult.from_messages(errors)


def validate_subtitle_element(element: Any) -> ValidationResult:
    """Validate a timed ``subtitle`` caption element.

    A missing start time is reported as a warning.
    """
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []
    warnings: List[str] = []

    if element.get("type") != "subtitle":
        errors.append('Subtitle element must have type "subtitle"')
    _check_required_string(element, "text", "Subtitle", errors)

    if "start" not in element:
        warnings.append("Subtitle should have a start time")
    elif not _is_number(element["start"]) or element["start"] < 0:
        errors.append("Subtitle start time must be a positive number")

    if "duration" in element:
        if not _is_number(element["duration"]) or element["duration"] <= 0:
            errors.append("Subtitle duration must be a positive number")

    return ValidationResult.from_messages(errors, warnings)


def validate_shape_element(element: Any) -> ValidationResult:
    """Validate a rectangle, circle, arrow or line element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []
    shape_type = element.get("type")

    if shape_type not in SHAPE_TYPES:
        errors.append(f"Shape element must have type one of: {', '.join(SHAPE_TYPES)}")

    if shape_type == "rectangle":
        if "width" in element and (not _is_number(element["width"]) or element["width"] <= 0):
            errors.append("Rectangle width must be a positive number")
        if "height" in element and (not _is_number(element["height"]) or element["height"] <= 0):
            errors.append("Rectangle height must be a positive number")

    if shape_type == "circle":
        if "radius" in element and (not _is_number(element["radius"]) or element["radius"] <= 0):
            errors.append("Circle radius must be a positive number")

    if "color" in element and not _is_hex_color(element["color"]):
        errors.append("Shape color must be a valid hex color (e.g., #FF0000)")

    return ValidationResult.from_messages(errors)


def validate_voice_element(element: Any) -> ValidationResult:
    """Validate a text-to-speech voice element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    _check_required_string(element, "text", "Voice", errors)
    _check_range(element, "rate", 0.5, 2,
                 "Voice rate must be a number between 0.5 and 2", errors)
    _check_range(element, "pitch", 0.5, 2,
                 "Voice pitch must be a number between 0.5 and 2", errors)
    _check_range(element, "volume", 0, 1,
                 "Voice volume must be a number between 0 and 1", errors)

    return ValidationResult.from_messages(errors)


def validate_component_element(element: Any) -> ValidationResult:
    """Validate a pre-built component element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    _check_required_string(element, "component", "Component", errors)
    if "settings" in element and not isinstance(element["settings"], Mapping):
        errors.append("Component settings must be an object")

    return ValidationResult.from_messages(errors)


def validate_html_element(element: Any) -> ValidationResult:
    """Validate an HTML snippet or web page element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    if _is_blank(element.get("src")) and _is_blank(element.get("html")):
        errors.append("HTML element must have a src or html property")
    _check_range(element, "wait", 0, 5,
                 "HTML wait must be a number between 0 and 5", errors)

    return ValidationResult.from_messages(errors)


def validate_audiogram_element(element: Any) -> ValidationResult:
    """Validate an audiogram (waveform) element."""
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    _check_required_string(element, "src", "Audiogram", errors)
    _check_range(element, "opacity", 0, 1,
                 "Audiogram opacity must be a number between 0 and 1", errors)
    _check_range(element, "amplitude", 0, 10,
                 "Audiogram amplitude must be a number between 0 and 10", errors)
    if "color" in element and not _is_hex_color(element["color"]):
        errors.append("Audiogram color must be a valid hex color (e.g., #FF0000)")

    return ValidationResult.from_messages(errors)


def validate_movie_subtitle_element(element: Any) -> ValidationResult:
    """Validate a movie-level ``subtitles`` element.

    Captions may come inline, from a file URL, or be generated from the audio.
    """
    base = validate_base_element(element)
    if not base.is_valid:
        return base

    errors: List[str] = []

    if not element.get("captions") and not element.get("text") and not element.get("src"):
        errors.append(
            "Must specify captions content, URL, or enable auto-generation from audio"
        )
    if element.get("language") and not isinstance(element["language"], str):
        errors.append(
            "Language must be a valid language code (e.g., 'en', 'es', 'fr')"
        )

    return ValidationResult.from_messages(errors)


VALIDATORS: Dict[str, Callable[[Any], ValidationResult]] = {
    "video": validate_video_element,
    "audio": validate_audio_element,
    "text": validate_text_element,
    "image": validate_image_element,
    "subtitle": validate_subtitle_element,
    "rectangle": validate_shape_element,
    "circle": validate_shape_element,
    "arrow": validate_shape_element,
    "line": validate_shape_element,
    "voice": validate_voice_element,
    "component": validate_component_element,
    "html": validate_html_element,
    "audiogram": validate_audiogram_element,
    "subtitles": validate_movie_subtitle_element,
}


def validate_element(element: Any) -> ValidationResult:
    """Validate an element of any kind, dispatching on its ``type``.

    Elements with a ``text`` field and no ``type`` are validated as text.
    """
    if element is None:
        return ValidationResult.failure("Element is null or undefined")
    if not isinstance(element, Mapping):
        return validate_base_element(element)

    element_type = element.get("type")
    if "text" in element and not element_type:
        return validate_text_element(element)
    if not element_type:
        return ValidationResult.failure("Element must have a type property")

    validator = VALIDATORS.get(element_type) if isinstance(element_type, str) else None
    if validator is None:
        return ValidationResult.failure(f"Unknown element type: {element_type}")
    return validator(element)


def validate_scene_element(element: Any) -> ValidationResult:
    """Validate an element placed inside a scene; subtitles are rejected."""
    if isinstance(element, Mapping) and element.get("type") == "subtitles":
        return ValidationResult.failure(SCENE_SUBTITLE_ERROR)
    return validate_element(element)


def validate_movie_element(element: Any) -> ValidationResult:
    """Validate an element placed at movie level; subtitles are allowed."""
    return validate_element(element)


def validate_elements(elements: Any) -> ValidationResult:
    """Validate a list of elements, prefixing messages with ``Element <index>: ``."""
    if not isinstance(elements, list):
        return ValidationResult.failure("Elements must be an array")

    return ValidationResult.combine(
        validate_element(element).with_prefix(f"Element {index}: ")
        for index, element in enumerate(elements)
    )


def get_validation_summary(result: ValidationResult) -> str:
    """Return a one-line human readable summary of a result."""
    if result.is_valid:
        warning_text = f" ({len(result.warnings)} warnings)" if result.warnings else ""
        return f"Valid{warning_text}"
    return f"Invalid: {len(result.errors)} errors, {len(result.warnings)} warnings"
