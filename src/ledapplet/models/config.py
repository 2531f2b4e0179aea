"""Client configuration model."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ledapplet.model_manager.persistence import PydanticPersistence
from ledapplet.protocol.taxonomy import DEFAULT_REVISION, REVISIONS, ProtocolRevision

DEFAULT_CONFIG_PATH = Path.home() / ".ledapplet" / "config.json"


class ClientConfig(BaseModel):
    """Where the board process listens and which firmware revision it speaks."""

    host: str = Field(
        default="127.0.0.1",
        description="Board-control process host (loopback unless tunnelled)",
    )
    port: int = Field(
        default=27072,
        ge=1,
        le=65535,
        description="Board-control process TCP port",
    )
    revision: str = Field(
        default=DEFAULT_REVISION,
        description=f"Protocol revision of the board firmware ({', '.join(REVISIONS)})",
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Socket timeout in seconds for connect/send/status reads (None = block)",
    )

    @field_validator("revision")
    @classmethod
    def validate_revision(cls, value: str) -> str:
        if value not in REVISIONS:
            raise ValueError(f"unknown protocol revision, expected one of {list(REVISIONS)}")
        return value

    @property
    def protocol(self) -> ProtocolRevision:
        """Resolved protocol revision."""
        return REVISIONS[self.revision]

    @classmethod
    def load_or_default(cls, path: Path | None = None) -> "ClientConfig":
        """
        Load config from file or return default.

        Args:
            path: Path to config file. If None, uses ~/.ledapplet/config.json.

        Raises:
            ConfigFileInvalidError: If config file has invalid JSON syntax
            ConfigValidationError: If config values fail validation
        """
        return PydanticPersistence.load_json_or_default(path or DEFAULT_CONFIG_PATH, cls)

    def save(self, path: Path | None = None) -> None:
        """Save config to file (with .bak backup of the previous file)."""
        PydanticPersistence.save_json(self, path or DEFAULT_CONFIG_PATH)
