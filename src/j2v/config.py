"""Configuration management."""

import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Config(BaseModel):
    """Application configuration."""

    # API access
    json2video_api_key: str = Field(
        default_factory=lambda: os.getenv("JSON2VIDEO_API_KEY", ""),
        description="JSON2Video API key"
    )
    json2video_base_url: str = Field(
        default_factory=lambda: os.getenv(
            "JSON2VIDEO_BASE_URL", "https://api.json2video.com/v2"
        ),
        description="JSON2Video API base URL"
    )
    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("JSON2VIDEO_TIMEOUT", "30")),
        description="HTTP timeout in seconds"
    )

    # Canvas defaults used when the parameter source has no value
    default_fps: int = Field(default=25, description="Default frame rate")
    default_width: int = Field(default=1024, description="Default output width")
    default_height: int = Field(default=768, description="Default output height")

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that required credentials are set.

        Raises:
            ValueError: If the API key is missing or the base URL is malformed.
        """
        if not self.json2video_api_key:
            raise ValueError("JSON2VIDEO_API_KEY not set")

        if not self.json2video_base_url.startswith(("http://", "https://")):
            raise ValueError(
                f"JSON2VIDEO_BASE_URL must be an http(s) URL. "
                f"Got: {self.json2video_base_url}"
            )


# Global config instance
config = Config()
