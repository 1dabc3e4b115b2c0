"""Parameter file model."""

from typing import Any, Dict, List
from pathlib import Path
from pydantic import BaseModel, Field
import yaml

from ..params import DictParameterSource


class ParameterFile(BaseModel):
    """Workflow parameters for one or more items, loaded from YAML or JSON."""

    operation: str = Field(default="createMovie", description="Builder to run")
    items: List[Dict[str, Any]] = Field(default_factory=list, description="Parameters per item")

    class Config:
        """Pydantic config."""
        frozen = False

    @classmethod
    def from_yaml(cls, path: Path) -> "ParameterFile":
        """Load parameters from a YAML (or JSON) file.

        A file without an ``items`` list is treated as a single item.
        """
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Parameter file must contain a mapping: {path}")
        if "items" not in data:
            data = dict(data)
            operation = data.pop("operation", "createMovie")
            return cls(operation=operation, items=[data])
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save parameters to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(), f, default_flow_style=False)

    def to_source(self) -> DictParameterSource:
        """Return a parameter source over the items."""
        return DictParameterSource(self.items)
