"""Request body data models."""

from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field

Number = Union[int, float]


class Transition(BaseModel):
    """Entry transition from the previous scene."""

    style: str = Field(..., description="Transition style, e.g. 'fade'")
    duration: Optional[Number] = Field(None, description="Transition duration in seconds")


class Scene(BaseModel):
    """One scene of the compiled movie."""

    elements: List[Dict[str, Any]] = Field(default_factory=list, description="API elements")
    duration: Optional[Number] = Field(None, description="Scene duration in seconds")
    background_color: Optional[str] = Field(
        None, alias="background-color", description="Scene background color"
    )
    comment: Optional[str] = Field(None, description="Free-form scene comment")
    transition: Optional[Transition] = Field(None, description="Entry transition")

    class Config:
        """Pydantic config."""
        frozen = False
        populate_by_name = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with API key names, dropping unset optional keys."""
        return self.model_dump(by_alias=True, exclude_none=True)


class RequestBody(BaseModel):
    """Top-level JSON2Video movie request."""

    fps: Number = Field(default=25, description="Frames per second")
    width: Number = Field(default=1024, description="Output width in pixels")
    height: Number = Field(default=768, description="Output height in pixels")
    quality: Optional[str] = Field(None, description="Render quality preset")
    cache: Optional[bool] = Field(None, description="Reuse cached renders")
    draft: Optional[bool] = Field(None, description="Render with a draft watermark")
    id: Optional[str] = Field(None, description="Caller supplied record id")
    client_data: Optional[Dict[str, Any]] = Field(
        None, alias="client-data", description="Opaque data echoed back by the API"
    )
    comment: Optional[str] = Field(None, description="Movie comment")
    exports: Optional[List[Dict[str, Any]]] = Field(None, description="Delivery destinations")
    elements: Optional[List[Dict[str, Any]]] = Field(None, description="Movie-level elements")
    scenes: List[Scene] = Field(default_factory=list, description="Ordered scenes")

    class Config:
        """Pydantic config."""
        frozen = False
        populate_by_name = True

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with API key names, dropping unset optional keys."""
        return self.model_dump(by_alias=True, exclude_none=True)
