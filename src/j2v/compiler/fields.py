"""Field mapping tables for converting raw elements to the API shape.

Each ``FieldMap`` moves one source key (camelCase, as entered in the
workflow) to a destination key (kebab-case, as the API expects), optionally
into a nested group such as ``settings`` or ``rotate`` and through a value
converter. Converters return ``SKIP`` to drop a value.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

SKIP = object()

Converter = Callable[[Any], Any]


@dataclass(frozen=True)
class FieldMap:
    """One source key to destination key mapping."""

    source: str
    dest: str
    group: Optional[str] = None
    convert: Optional[Converter] = None


def to_number(value: Any) -> Optional[float]:
    """Convert numbers and numeric strings; return None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return int(parsed) if parsed.is_integer() else parsed
    return None


def number(value: Any) -> Any:
    result = to_number(value)
    return SKIP if result is None else result


def non_negative(value: Any) -> Any:
    result = to_number(value)
    return result if result is not None and result >= 0 else SKIP


def positive(value: Any) -> Any:
    result = to_number(value)
    return result if result is not None and result > 0 else SKIP


def non_zero(value: Any) -> Any:
    result = to_number(value)
    return result if result is not None and result != 0 else SKIP


def in_range(low: float, high: float) -> Converter:
    """Keep numbers inside ``[low, high]``, drop everything else."""
    def convert(value: Any) -> Any:
        result = to_number(value)
        if result is None or result < low or result > high:
            return SKIP
        return result
    return convert


def clamp(low: float, high: float, default: float) -> Converter:
    """Clamp numbers into ``[low, high]``; non-numbers become ``default``."""
    def convert(value: Any) -> Any:
        result = to_number(value)
        if result is None:
            return default
        return max(low, min(high, result))
    return convert


def media_duration(value: Any) -> Any:
    # -1 and -2 ask the API to use the full media length
    result = to_number(value)
    if result is None or not (result > 0 or result in (-1, -2)):
        return SKIP
    return result


def boolean(value: Any) -> Any:
    return bool(value)


def deep_copy(value: Any) -> Any:
    return copy.deepcopy(value)


# Timing and bookkeeping shared by every element kind
COMMON_FIELDS: List[FieldMap] = [
    FieldMap("id", "id"),
    FieldMap("start", "start"),
    FieldMap("duration", "duration"),
    FieldMap("extraTime", "extra-time"),
    FieldMap("fadeIn", "fade-in", convert=non_negative),
    FieldMap("fadeOut", "fade-out", convert=non_negative),
    FieldMap("zIndex", "z-index"),
    FieldMap("cache", "cache"),
    FieldMap("comment", "comment"),
    FieldMap("condition", "condition"),
    FieldMap("variables", "variables"),
]

# Placement and visual effects shared by elements that occupy the canvas
VISUAL_FIELDS: List[FieldMap] = [
    FieldMap("width", "width", convert=positive),
    FieldMap("height", "height", convert=positive),
    FieldMap("resize", "resize"),
    FieldMap("crop", "crop"),
    FieldMap("zoom", "zoom", convert=non_zero),
    FieldMap("pan", "pan"),
    FieldMap("panCrop", "pan-crop"),
    FieldMap("panDistance", "pan-distance"),
    FieldMap("flipHorizontal", "flip-horizontal"),
    FieldMap("flipVertical", "flip-vertical"),
    FieldMap("mask", "mask"),
    FieldMap("rotateAngle", "angle", group="rotate"),
    FieldMap("rotateSpeed", "speed", group="rotate"),
    FieldMap("chromaKeyColor", "color", group="chroma-key"),
    FieldMap("chromaKeyTolerance", "tolerance", group="chroma-key"),
    FieldMap("brightness", "brightness", group="correction"),
    FieldMap("contrast", "contrast", group="correction"),
    FieldMap("gamma", "gamma", group="correction"),
    FieldMap("saturation", "saturation", group="correction"),
]

TEXT_SETTINGS_FIELDS: List[FieldMap] = [
    FieldMap("fontFamily", "font-family", group="settings"),
    FieldMap("font-family", "font-family", group="settings"),
    FieldMap("fontSize", "font-size", group="settings"),
    FieldMap("font-size", "font-size", group="settings"),
    FieldMap("fontWeight", "font-weight", group="settings"),
    FieldMap("fontColor", "font-color", group="settings"),
    FieldMap("color", "font-color", group="settings"),
    FieldMap("backgroundColor", "background-color", group="settings"),
    FieldMap("textAlign", "text-align", group="settings"),
    FieldMap("lineHeight", "line-height", group="settings"),
    FieldMap("letterSpacing", "letter-spacing", group="settings"),
    FieldMap("textShadow", "text-shadow", group="settings"),
    FieldMap("textTransform", "text-transform", group="settings"),
    FieldMap("verticalPosition", "vertical-position", group="settings"),
    FieldMap("horizontalPosition", "horizontal-position", group="settings"),
]

SUBTITLE_SETTINGS_FIELDS: List[FieldMap] = TEXT_SETTINGS_FIELDS + [
    FieldMap("border", "border", group="settings"),
    FieldMap("borderRadius", "border-radius", group="settings"),
    FieldMap("padding", "padding", group="settings"),
    FieldMap("margin", "margin", group="settings"),
    FieldMap("maxWidth", "max-width", group="settings"),
    FieldMap("wordWrap", "word-wrap", group="settings"),
    FieldMap("whiteSpace", "white-space", group="settings"),
    FieldMap("opacity", "opacity", group="settings"),
]

SHAPE_FIELDS: List[FieldMap] = [
    FieldMap("color", "color"),
    FieldMap("radius", "radius", convert=positive),
    FieldMap("thickness", "thickness", convert=positive),
]

KIND_FIELDS: Dict[str, List[FieldMap]] = {
    "video": [
        FieldMap("src", "src"),
        FieldMap("duration", "duration", convert=media_duration),
        FieldMap("seek", "seek", convert=non_negative),
        FieldMap("volume", "volume"),
        FieldMap("muted", "muted"),
        FieldMap("loop", "loop", convert=number),
        FieldMap("fit", "fit"),
        FieldMap("speed", "speed"),
    ] + VISUAL_FIELDS,
    "audio": [
        FieldMap("src", "src"),
        FieldMap("volume", "volume"),
        FieldMap("muted", "muted", convert=boolean),
        FieldMap("loop", "loop", convert=number),
    ],
    "image": [
        FieldMap("src", "src"),
        FieldMap("prompt", "prompt"),
        FieldMap("model", "model"),
        FieldMap("aspectRatio", "aspect-ratio"),
        FieldMap("connection", "connection"),
        FieldMap("modelSettings", "model-settings"),
        FieldMap("fit", "fit"),
        FieldMap("opacity", "opacity"),
        FieldMap("scaleWidth", "width", group="scale"),
        FieldMap("scaleHeight", "height", group="scale"),
    ] + VISUAL_FIELDS,
    "voice": [
        FieldMap("text", "text"),
        FieldMap("voice", "voice"),
        FieldMap("model", "model"),
        FieldMap("connection", "connection"),
        FieldMap("rate", "rate", convert=in_range(0.5, 2.0)),
        FieldMap("pitch", "pitch", convert=in_range(0.5, 2.0)),
        FieldMap("volume", "volume"),
        FieldMap("muted", "muted", convert=boolean),
    ],
    "component": [
        FieldMap("component", "component"),
        FieldMap("settings", "settings", convert=deep_copy),
    ] + VISUAL_FIELDS,
    "html": [
        FieldMap("html", "html"),
        FieldMap("src", "src"),
        FieldMap("tailwindcss", "tailwindcss", convert=boolean),
        FieldMap("wait", "wait", convert=clamp(0, 5, 2)),
    ] + VISUAL_FIELDS,
    "audiogram": [
        FieldMap("src", "src"),
        FieldMap("color", "color"),
        FieldMap("opacity", "opacity", convert=clamp(0, 1, 0.5)),
        FieldMap("amplitude", "amplitude", convert=clamp(0, 10, 5)),
    ] + VISUAL_FIELDS,
    "text": [
        FieldMap("text", "text"),
        FieldMap("style", "style"),
        FieldMap("position", "position"),
        FieldMap("x", "x"),
        FieldMap("y", "y"),
    ] + TEXT_SETTINGS_FIELDS + [
        FieldMap("customSettings", "settings"),
    ] + VISUAL_FIELDS,
    "subtitles": [
        FieldMap("text", "text"),
        FieldMap("src", "src"),
        FieldMap("language", "language"),
        FieldMap("model", "model"),
        FieldMap("position", "position"),
    ] + SUBTITLE_SETTINGS_FIELDS,
    "rectangle": SHAPE_FIELDS + VISUAL_FIELDS,
    "circle": SHAPE_FIELDS + VISUAL_FIELDS,
    "arrow": SHAPE_FIELDS + VISUAL_FIELDS,
    "line": SHAPE_FIELDS + VISUAL_FIELDS,
}

# Nested objects the API expects to be complete once any member is given
GROUP_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "rotate": {"angle": 0},
    "scale": {"width": 0, "height": 0},
}

# Kinds whose x/y come from a position preset rather than passing through
POSITIONED_KINDS = {
    "video", "image", "component", "html", "audiogram",
    "rectangle", "circle", "arrow", "line",
}


def fields_for(kind: str) -> List[FieldMap]:
    """Return the kind's own field maps followed by the common ones.

    A common field whose source key the kind maps itself is left out.
    """
    own = KIND_FIELDS[kind]
    own_sources = {field.source for field in own}
    return own + [field for field in COMMON_FIELDS if field.source not in own_sources]


def is_defined(value: Any) -> bool:
    return value is not None and value != ""


def apply_field_maps(element: Dict[str, Any], maps: List[FieldMap]) -> Dict[str, Any]:
    """Apply field maps to a raw element and return the mapped fields.

    Grouped fields are collected into nested objects, which are only emitted
    when at least one member is present.
    """
    result: Dict[str, Any] = {}
    groups: Dict[str, Dict[str, Any]] = {}

    for field in maps:
        if field.source not in element:
            continue
        value = element[field.source]
        if not is_defined(value):
            continue
        if field.convert is not None:
            value = field.convert(value)
            if value is SKIP:
                continue
        if field.group is None:
            if field.dest == "settings" and isinstance(value, dict):
                groups.setdefault("settings", {}).update(value)
            else:
                result[field.dest] = value
        else:
            groups.setdefault(field.group, {})[field.dest] = value

    for group, values in groups.items():
        if not values:
            continue
        result[group] = {**GROUP_DEFAULTS.get(group, {}), **values}

    return result
