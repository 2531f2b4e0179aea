"""JSON persistence for the client config file.

Any pydantic model can be stored, but `ClientConfig` is the only one
ledapplet keeps on disk. Pydantic and I/O failures surface as
ConfigurationError subclasses (see `wrap_pydantic_error`).

Writes never leave a half-written file behind: the previous file is copied
to `<name>.bak`, the new content goes to `<name>.tmp`, and the temp file is
renamed over the target.
"""

import logging
import shutil
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from ledapplet.exceptions import ConfigFileInvalidError, ConfigurationError, wrap_pydantic_error

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class PydanticPersistence:
    """Stateless load/save helpers for pydantic models stored as JSON."""

    @staticmethod
    def load_json(path: Path, model_type: type[T]) -> T:
        """
        Read and validate a model from `path`.

        Raises:
            FileNotFoundError: The file does not exist
            ConfigFileInvalidError: Empty file, bad JSON syntax or unreadable file
            ConfigValidationError: Well-formed JSON with invalid values
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigFileInvalidError(str(path), f"Cannot read file: {e}") from e

        if not text.strip():
            raise ConfigFileInvalidError(str(path), "File is empty")

        try:
            model = model_type.model_validate_json(text)
        except ValidationError as e:
            logger.error(f"Invalid {model_type.__name__} in {path}: {e}")
            raise wrap_pydantic_error(e, str(path)) from e

        logger.debug(f"Loaded {model_type.__name__} from {path}")
        return model

    @staticmethod
    def save_json(data: BaseModel, path: Path, backup: bool = True) -> None:
        """
        Write `data` to `path` as indented JSON, creating parent directories.

        Args:
            data: Model to store
            path: Target file
            backup: Copy an existing file to `<name>.bak` first

        Raises:
            ConfigurationError: The file could not be written
        """
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)

            if backup and path.exists():
                shutil.copy2(path, path.with_suffix(path.suffix + ".bak"))

            temp_path.write_text(data.model_dump_json(indent=2), encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to save {type(data).__name__} to {path}: {e}")
            raise ConfigurationError(
                user_message=f"Failed to save configuration to {path}",
                technical_message=f"Writing {path} failed: {e}",
                recovery_hint="Check file permissions and disk space. A .bak copy may be available.",
            ) from e
        finally:
            if temp_path.exists():
                temp_path.unlink()

        logger.debug(f"Saved {type(data).__name__} to {path}")

    @staticmethod
    def load_json_or_default(path: Path, model_type: type[T]) -> T:
        """
        Like `load_json`, but a missing file yields `model_type()`.

        Broken files still raise. The default is not written to disk.
        """
        try:
            return PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            logger.info(f"No file at {path}, using default {model_type.__name__}")
            return model_type()

    @staticmethod
    def validate_json(path: Path, model_type: type[T]) -> tuple[bool, str | None]:
        """Check a file without using it. Returns (is_valid, error_message)."""
        try:
            PydanticPersistence.load_json(path, model_type)
        except FileNotFoundError:
            return False, f"File not found: {path}"
        except ConfigurationError as e:
            return False, e.user_message
        return True, None
