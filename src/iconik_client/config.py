"""
Iconik Client Configuration

Configuration management for the client and CLI tools using environment
variables (optionally read from a ``.env`` file).
"""

import os
from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables
load_dotenv()

DEFAULT_HOST = "https://app.iconik.io/API/"


class IconikConfig(BaseModel):
    """
    Configuration for the Iconik client.

    All values are loaded from environment variables; command-line flags
    take precedence over them.
    """

    # Credentials (application key id and token)
    app_id: str = Field(
        default_factory=lambda: os.getenv("ICONIK_APP_ID", ""),
        description="Iconik application key id (App-ID header)"
    )

    auth_token: str = Field(
        default_factory=lambda: os.getenv("ICONIK_AUTH_TOKEN", ""),
        description="Token generated alongside the application key (Auth-Token header)"
    )

    # API Configuration
    host: str = Field(
        default_factory=lambda: os.getenv("ICONIK_HOST", DEFAULT_HOST),
        description="Base URL of the Iconik API, including the /API/ prefix"
    )

    request_timeout: float = Field(
        default_factory=lambda: float(os.getenv("ICONIK_REQUEST_TIMEOUT", "60.0")),
        description="HTTP timeout in seconds"
    )

    debug: bool = Field(
        default_factory=lambda: os.getenv("ICONIK_DEBUG", "false").lower() == "true",
        description="Log requests and response bodies"
    )

    # Logging Configuration
    log_level: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    def validate_required_fields(self) -> None:
        """
        Validate that the credentials are set.

        Raises:
            ValueError: If required fields are missing
        """
        env_names = {"app_id": "ICONIK_APP_ID", "auth_token": "ICONIK_AUTH_TOKEN"}
        required_fields = {
            "app_id": self.app_id,
            "auth_token": self.auth_token,
        }

        missing = [field for field, value in required_fields.items() if not value]

        if missing:
            raise ValueError(
                f"Required configuration missing: {', '.join(missing)}. "
                f"Please set the following environment variables: "
                f"{', '.join(env_names[field] for field in missing)}"
            )


def load_config() -> IconikConfig:
    """
    Load and validate client configuration from environment.

    Returns:
        IconikConfig instance

    Raises:
        ValueError: If required configuration is missing
    """
    config = IconikConfig()
    config.validate_required_fields()
    return config
