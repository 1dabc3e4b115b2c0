"""Request builder for the createMovie operation."""

import logging
from typing import Any, Dict, List

from ..models import Scene
from ..params import ParameterSource, lookup
from .scenes import assemble_scene
from .shared import (
    COMMON_OPERATION_PARAMS,
    add_common_parameters,
    finalize_request_body,
    initialize_request_body,
    process_all_movie_elements,
    process_export_settings,
    process_output_settings,
)

logger = logging.getLogger(__name__)


def process_create_movie_scenes(
    params: ParameterSource,
    item_index: int,
    width: Any,
    height: Any,
) -> List[Scene]:
    """Assemble every scene in ``scenes.sceneValues``.

    A source that fails to return the scene list yields no scenes; the
    finalized body then falls back to a single empty scene.
    """
    result = lookup(params, "scenes.sceneValues", item_index, [])
    if not result.ok:
        logger.warning(
            f"Could not read scenes for item {item_index}, "
            f"using a single empty scene: {result.error}"
        )
        return []

    raw_scenes = result.value
    if not isinstance(raw_scenes, (list, tuple)):
        return []

    return [
        assemble_scene(raw_scene, width, height, index)
        for index, raw_scene in enumerate(raw_scenes)
    ]


def build_create_movie_request_body(params: ParameterSource, item_index: int = 0) -> Dict[str, Any]:
    """Compile a createMovie request body.

    Args:
        params: Source of the workflow parameters.
        item_index: Workflow item to compile.

    Returns:
        The request body as a JSON-ready dict.

    Raises:
        ElementValidationError: If a movie or scene element is invalid.
    """
    body = initialize_request_body(params, item_index)
    add_common_parameters(params, body, item_index, COMMON_OPERATION_PARAMS)

    movie_elements = process_all_movie_elements(params, body, item_index)
    scenes = process_create_movie_scenes(params, item_index, body.width, body.height)

    process_output_settings(params, body, item_index)
    process_export_settings(params, body, item_index)

    logger.debug(
        f"Compiled createMovie item {item_index}: {len(scenes)} scenes, "
        f"{len(movie_elements)} movie elements"
    )
    return finalize_request_body(body, scenes, movie_elements)
