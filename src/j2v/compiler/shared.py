"""Helpers shared by the operation request builders."""

import json
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from ..config import config
from ..models import RequestBody, Scene
from ..params import ParameterSource, get_collection, lookup
from .aggregator import validate_collection
from .fields import to_number
from .processor import process_element, process_subtitle_element, process_text_element
from .validators import (
    validate_movie_element,
    validate_movie_subtitle_element,
    validate_text_element,
)

logger = logging.getLogger(__name__)

COMMON_OPERATION_PARAMS = ("quality", "cache", "client-data", "comment", "draft")


def _trimmed(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def initialize_request_body(params: ParameterSource, item_index: int) -> RequestBody:
    """Create the request body with canvas size and frame rate."""
    return RequestBody(
        fps=lookup(params, "framerate", item_index, config.default_fps)
        .value_or(config.default_fps),
        width=lookup(params, "output_width", item_index, config.default_width)
        .value_or(config.default_width),
        height=lookup(params, "output_height", item_index, config.default_height)
        .value_or(config.default_height),
        scenes=[],
    )


def webhook_exports(webhook_url: Any) -> Optional[List[Dict[str, Any]]]:
    """Build a single webhook export, or None for a blank URL."""
    endpoint = _trimmed(webhook_url)
    if endpoint is None:
        return None
    return [{"destinations": [{"type": "webhook", "endpoint": endpoint}]}]


def parse_client_data(raw: Any) -> Optional[Dict[str, Any]]:
    """Parse ``client-data``; only non-empty JSON objects are kept.

    Invalid JSON is ignored rather than reported.
    """
    if isinstance(raw, Mapping):
        return dict(raw) or None
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        logger.debug(f"Ignoring client-data that is not valid JSON: {e}")
        return None
    if isinstance(parsed, dict) and parsed:
        return parsed
    return None


def add_common_parameters(
    params: ParameterSource,
    body: RequestBody,
    item_index: int,
    include: Iterable[str] = (),
) -> None:
    """Set id, webhook export and the optional operation parameters."""
    record_id = _trimmed(lookup(params, "recordId", item_index, "").value_or(""))
    if record_id is not None:
        body.id = record_id

    exports = webhook_exports(lookup(params, "webhookUrl", item_index, "").value_or(""))
    if exports is not None:
        body.exports = exports

    include = set(include)
    if "quality" in include:
        quality = lookup(params, "quality", item_index, "").value_or("")
        if quality:
            body.quality = quality
    if "cache" in include:
        cache = lookup(params, "cache", item_index, None).value_or(None)
        if cache is not None:
            body.cache = bool(cache)
    if "client-data" in include:
        client_data = parse_client_data(
            lookup(params, "client-data", item_index, "{}").value_or("{}")
        )
        if client_data is not None:
            body.client_data = client_data
    if "comment" in include:
        comment = _trimmed(lookup(params, "comment", item_index, "").value_or(""))
        if comment is not None:
            body.comment = comment
    if "draft" in include:
        draft = lookup(params, "draft", item_index, None).value_or(None)
        if draft is not None:
            body.draft = bool(draft)


def build_export_destination(export_config: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
    """Convert one export configuration to an API destination.

    Returns None when the configuration lacks its required target.
    """
    export_type = export_config.get("exportType", "webhook")

    if export_type == "webhook":
        endpoint = _trimmed(export_config.get("webhookUrl"))
        if endpoint is None:
            return None
        return {"type": "webhook", "endpoint": endpoint}

    if export_type == "ftp":
        host = _trimmed(export_config.get("ftpHost"))
        if host is None:
            return None
        destination: Dict[str, Any] = {
            "type": "ftp",
            "host": host,
            "username": export_config.get("ftpUsername"),
            "password": export_config.get("ftpPassword"),
        }
        port = to_number(export_config.get("ftpPort"))
        if port and port != 21:
            destination["port"] = int(port)
        path = _trimmed(export_config.get("ftpPath"))
        if path is not None and path != "/":
            destination["remote-path"] = path
        file_name = _trimmed(export_config.get("ftpFile"))
        if file_name is not None:
            destination["file"] = file_name
        if export_config.get("ftpSecure") is True:
            destination["secure"] = True
        return destination

    if export_type == "email":
        to = _trimmed(export_config.get("emailTo"))
        if to is None:
            return None
        destination = {"type": "email", "to": to}
        sender = _trimmed(export_config.get("emailFrom"))
        if sender is not None:
            destination["from"] = sender
        subject = _trimmed(export_config.get("emailSubject"))
        if subject is not None and subject != "Your video is ready":
            destination["subject"] = subject
        message = _trimmed(export_config.get("emailMessage"))
        if message is not None:
            destination["message"] = message
        return destination

    logger.warning(f"Ignoring export with unknown type: {export_type}")
    return None


def process_export_settings(params: ParameterSource, body: RequestBody, item_index: int) -> None:
    """Append destinations from ``exportSettings.exportValues`` to the exports."""
    destinations = []
    for export_config in get_collection(params, "exportSettings.exportValues", item_index):
        if not isinstance(export_config, Mapping):
            continue
        destination = build_export_destination(export_config)
        if destination is not None:
            destinations.append(destination)

    if destinations:
        body.exports = (body.exports or []) + [{"destinations": destinations}]


def process_output_settings(params: ParameterSource, body: RequestBody, item_index: int) -> None:
    """Apply ``outputSettings.outputDetails`` overrides of size, fps and quality."""
    details = lookup(params, "outputSettings.outputDetails", item_index, {}).value_or({})
    if not isinstance(details, Mapping):
        return

    for key in ("width", "height", "fps"):
        if details.get(key) is None:
            continue
        value = to_number(details[key])
        if value is None:
            logger.warning(f"Ignoring non-numeric output {key}: {details[key]!r}")
            continue
        setattr(body, key, value)
    if details.get("quality"):
        body.quality = details["quality"]


def process_text_collection(elements: List[Any], label: str) -> List[Dict[str, Any]]:
    """Validate a text element collection as a whole, then convert each entry.

    Raises:
        ElementValidationError: If any entry is invalid.
    """
    validate_collection(elements, validate_text_element, label)
    return convert_text_elements(elements, label)


def convert_text_elements(elements: List[Any], label: str) -> List[Dict[str, Any]]:
    """Convert validated text elements; failures are logged and skipped."""
    processed: List[Dict[str, Any]] = []
    for element in elements:
        try:
            processed.append(process_text_element(element))
        except Exception as e:
            logger.warning(f"Failed to process {label.lower()}: {e}")
    return processed


def process_movie_text_elements(params: ParameterSource, item_index: int) -> List[Dict[str, Any]]:
    """Read, validate and convert ``movieTextElements.textDetails``."""
    elements = get_collection(params, "movieTextElements.textDetails", item_index)
    return process_text_collection(elements, "Movie text element")


def process_movie_subtitle_elements(params: ParameterSource, item_index: int) -> List[Dict[str, Any]]:
    """Read, validate and convert ``movieElements.subtitleDetails``."""
    elements = get_collection(params, "movieElements.subtitleDetails", item_index)
    validate_collection(elements, validate_movie_subtitle_element, "Movie subtitle element")
    return [process_subtitle_element(element) for element in elements]


def process_movie_elements(
    elements: List[Any],
    body: RequestBody,
) -> List[Dict[str, Any]]:
    """Convert validated movie-level elements; failures are logged and skipped."""
    processed: List[Dict[str, Any]] = []
    for element in elements:
        try:
            processed.append(process_element(element, body.width, body.height))
        except Exception as e:
            logger.warning(f"Failed to process movie element: {e}")
    return processed


def process_all_movie_elements(
    params: ParameterSource,
    body: RequestBody,
    item_index: int,
    include_subtitles: bool = False,
) -> List[Dict[str, Any]]:
    """Collect every movie-level element in output order.

    Text elements come first, then subtitle details (when supported), then
    the mixed ``movieElements.elementValues`` collection.

    Raises:
        ElementValidationError: If any movie-level collection is invalid.
    """
    movie_elements = process_movie_text_elements(params, item_index)

    if include_subtitles:
        movie_elements.extend(process_movie_subtitle_elements(params, item_index))

    mixed = get_collection(params, "movieElements.elementValues", item_index)
    if mixed:
        validate_collection(mixed, validate_movie_element, "Movie element")
        movie_elements.extend(process_movie_elements(mixed, body))

    return movie_elements


def process_video_elements(elements: List[Mapping[str, Any]], body: RequestBody) -> List[Dict[str, Any]]:
    """Convert video details, defaulting the element type to ``video``."""
    return [
        process_element({"type": "video", **element}, body.width, body.height)
        for element in elements
    ]


def process_audio_elements(elements: List[Mapping[str, Any]], body: RequestBody) -> List[Dict[str, Any]]:
    """Convert audio details, defaulting the element type to ``audio``."""
    return [
        process_element({"type": "audio", **element}, body.width, body.height)
        for element in elements
    ]


def finalize_request_body(
    body: RequestBody,
    scenes: List[Scene],
    movie_elements: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """Attach scenes and movie elements and serialize the body.

    There is always at least one scene; ``elements`` is omitted when empty.
    """
    body.scenes = scenes if scenes else [Scene(elements=[])]
    if movie_elements:
        body.elements = movie_elements
    return body.to_dict()
