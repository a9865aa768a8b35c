"""Centralized application configuration."""

import base64
import tomllib
from pathlib import Path
from typing import Any, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_DATA_DIR = Path.home() / ".local" / "dlcwallet"
DEFAULT_SERVER_URL = "http://localhost:9999/"
DEFAULT_ORACLE_EXPLORER_URL = "http://localhost:4200/oracleexplorer"

# Keys accepted from config.toml, with the type each must have
_TOML_KEYS: dict[str, type | tuple[type, ...]] = {
    "server_url": str,
    "authorization": str,
    "rpc_user": str,
    "rpc_password": str,
    "poll_interval": (int, float),
    "oracle_explorer_url": str,
    "oracle_explorer": str,
}


def basic_auth_header(user: str, password: str) -> str:
    """Build an HTTP basic-auth header value from a user/password pair."""
    token = base64.b64encode(f"{user}:{password}".encode()).decode()
    return f"Basic {token}"


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for all application data")
    server_url: str = Field(default=DEFAULT_SERVER_URL, description="Wallet server endpoint")
    authorization: str = Field(default="", description="Raw Authorization header value (wins over rpc_user/rpc_password)")
    rpc_user: str = Field(default="", description="Basic-auth user for the wallet server")
    rpc_password: str = Field(default="", description="Basic-auth password for the wallet server")
    poll_interval: float = Field(default=5.0, gt=0, description="Delay between availability checks in seconds")
    oracle_explorer_url: str = Field(default=DEFAULT_ORACLE_EXPLORER_URL, description="Oracle explorer API root")
    oracle_explorer: Literal["test", "prod"] = Field(default="test", description="Oracle explorer to target")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "dlcwallet.log"

    @computed_field(description="Locally chosen oracle name")
    @property
    def oracle_name_path(self) -> Path:
        """Locally chosen oracle name."""
        return self.data_dir / "oracle_name"

    @computed_field(description="Authorization header sent to the wallet server")
    @property
    def authorization_header(self) -> str:
        """Authorization header sent to the wallet server, empty when no credentials are configured."""
        if self.authorization:
            return self.authorization
        if self.rpc_user:
            return basic_auth_header(self.rpc_user, self.rpc_password)
        return ""

    @classmethod
    def build(cls, data_dir: Path | None = None, **overrides: Any) -> Self:  # noqa: ANN401
        """Build a Config from defaults, optional config.toml, and explicit overrides.

        Overrides whose value is None are ignored, so CLI options can be passed straight through.
        """
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            for key, expected in _TOML_KEYS.items():
                if isinstance(toml_data.get(key), expected):
                    kwargs[key] = toml_data[key]
        kwargs.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**kwargs)
