"""Data models for the request compiler."""

from .validation import ValidationResult
from .request import Transition, Scene, RequestBody
from .parameter_file import ParameterFile

__all__ = ["ValidationResult", "Transition", "Scene", "RequestBody", "ParameterFile"]
