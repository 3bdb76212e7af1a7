"""Pydantic configuration models for ngpull."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://www.newgrounds.com"
DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:138.0) Gecko/20100101 Firefox/138.0"
DEFAULT_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36"
)


class NetworkConfig(BaseModel):
    """Configuration for static page fetching."""

    base_url: str = Field(DEFAULT_BASE_URL, description="Site root used to build page URLs")
    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header for page requests")
    timeout: float = Field(30.0, gt=0, description="Request timeout in seconds")

    model_config = {"extra": "forbid"}


class BrowserConfig(BaseModel):
    """Configuration for the rendered-page browser session."""

    headless: bool = Field(True, description="Run the browser without a window")
    viewport_width: int = Field(1280, ge=320, description="Viewport width in pixels")
    viewport_height: int = Field(720, ge=240, description="Viewport height in pixels")
    user_agent: str = Field(DEFAULT_BROWSER_USER_AGENT, description="User-Agent for the browser context")
    timeout: float = Field(30.0, gt=0, description="Navigation timeout in seconds")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        "networkidle",
        description="Navigation is complete when this load state is reached",
    )

    model_config = {"extra": "forbid"}


class NgpullConfig(BaseModel):
    """
    Root configuration model for ngpull.

    Example:
        config = NgpullConfig(network=NetworkConfig(timeout=10))

    YAML format:
        network:
          timeout: 10
        browser:
          headless: false
        log_level: DEBUG
    """

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    browser: BrowserConfig = Field(default_factory=BrowserConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "NgpullConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "NgpullConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
