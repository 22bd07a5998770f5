"""Configuration for the request dispatcher with Pydantic validation.

Settings can be built with defaults, loaded from a YAML file, or read from
``WEB_SERVICE_*`` environment variables.
"""

import logging
import os
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "WEB_SERVICE_"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class WebServiceConfig(BaseModel):
    """Request construction and response handling settings.

    The configuration can be:
    - Instantiated with defaults: `WebServiceConfig()`
    - Loaded from YAML: `WebServiceConfig.from_yaml("web_service.yaml")`
    - Loaded from the environment: `WebServiceConfig.from_env()`
    - Saved to YAML: `config.to_yaml("web_service.yaml")`
    """

    model_config = ConfigDict(frozen=True)

    timeout: float | None = Field(
        None,
        gt=0,
        description="Request timeout in seconds (None = transport default)",
    )
    content_type: str = Field(
        "application/json",
        min_length=1,
        description="Content-Type header set on every verb request",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Extra headers merged into every request",
    )
    post_encoding: Literal["json", "form"] = Field(
        "json",
        description="POST body encoding: raw JSON bytes or form-escaped JSON text",
    )
    form_encoding: Literal["urlencoded", "multipart"] = Field(
        "urlencoded",
        description="Encoding used by post_form for field mappings",
    )
    invalid_json: Literal["error", "null"] = Field(
        "error",
        description="Success responses with a non-JSON body: report an error or pass None",
    )
    include_error_body: bool = Field(
        False,
        description="Attach the response body to protocol errors",
    )
    follow_redirects: bool = Field(
        True,
        description="Follow HTTP redirects before checking the status code",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        "INFO",
        description="Level used by configure_logging()",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @classmethod
    def from_yaml(cls, path: str) -> "WebServiceConfig":
        """Load configuration from a YAML file.

        Args:
            path: Path to the YAML configuration file.

        Returns:
            A validated WebServiceConfig instance.

        Raises:
            FileNotFoundError: If the configuration file doesn't exist.
            ValidationError: If the configuration is invalid.
        """
        with open(path) as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "WebServiceConfig":
        """Load configuration from WEB_SERVICE_* environment variables.

        Unset variables keep their defaults. ``headers`` is not read from
        the environment.

        Args:
            environ: Mapping to read instead of os.environ.

        Returns:
            A validated WebServiceConfig instance.
        """
        env = os.environ if environ is None else environ
        data: dict[str, str] = {}
        for name in cls.model_fields:
            if name == "headers":
                continue
            value = env.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None and value != "":
                data[name] = value
        return cls.model_validate(data)

    def to_yaml(self, path: str) -> None:
        """Save configuration to a YAML file.

        Args:
            path: Path where the YAML file will be saved.
        """
        with open(path, "w") as f:
            yaml.dump(
                self.model_dump(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )


def configure_logging(config: WebServiceConfig | None = None) -> None:
    """Configure root logging for scripts using the dispatcher."""
    level = (config or WebServiceConfig()).log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
