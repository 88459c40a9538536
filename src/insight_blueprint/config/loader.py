import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

DEFAULT_CONFIG_PATH = Path("config/insight.yaml")
CLIENT_ID_ENV = "THIRDWEB_CLIENT_ID"


class InsightConfig(BaseModel):
    """Connection settings for the Insight API.

    Passed explicitly into every source so tests can point at a fake host
    or credential without touching process-wide state.
    """

    client_id: str
    host: str = "insight.thirdweb.com"
    scheme: str = "https"
    api_version: str = "v1"
    timeout_seconds: Optional[float] = Field(default=None, gt=0)
    user_agent: str = "insight-blueprint/0.1"

    @field_validator("client_id")
    @classmethod
    def _client_id_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("client_id must not be empty")
        return value.strip()

    def base_url(self, chain_id: str) -> str:
        """Chain-scoped API root, e.g. https://1.insight.thirdweb.com/v1/<client_id>."""
        return f"{self.scheme}://{chain_id}.{self.host}/{self.api_version}/{self.client_id}"


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load the YAML configuration document.

    Args:
        path: Optional path to insight.yaml. Defaults to config/insight.yaml

    Returns:
        Dictionary with the raw configuration

    Raises:
        FileNotFoundError: If the config file doesn't exist
        ValueError: If the document structure is invalid
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Config file is not valid YAML: {cfg_path}: {e}") from e

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")
    if "version" not in config:
        raise ValueError("Config must have 'version' field")
    if config.get("insight") is None:
        config["insight"] = {}
    elif not isinstance(config["insight"], dict):
        raise ValueError("Config 'insight' section must be a dictionary")

    return config


def load_client_config(
    path: Path | None = None,
    env: Optional[Mapping[str, str]] = None,
) -> InsightConfig:
    """
    Build the client configuration from YAML and the environment.

    The default config file is optional; an explicit ``path`` must exist.
    ``THIRDWEB_CLIENT_ID`` in the environment overrides the file's client_id.

    Raises:
        ValueError: If no client id is configured anywhere
    """
    env = os.environ if env is None else env

    settings: Dict[str, Any] = {}
    if path is not None or DEFAULT_CONFIG_PATH.exists():
        settings.update(load_config(path)["insight"])

    client_id = env.get(CLIENT_ID_ENV)
    if client_id:
        settings["client_id"] = client_id
    if not settings.get("client_id"):
        raise ValueError(
            f"Missing client id: set {CLIENT_ID_ENV} or 'insight.client_id' in {path or DEFAULT_CONFIG_PATH}"
        )

    return InsightConfig(**settings)
