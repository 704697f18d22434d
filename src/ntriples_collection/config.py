"""
Codec configuration for ntriples-collection.

Provides:
- Decoder and encoder options
- File collaborator options
- JSON persistence and validation
"""
from __future__ import annotations

import codecs
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "ntriples.json"


class InvalidLiteralPolicy(Enum):
    """What the encoder does with an object that is not valid term syntax."""
    ABORT = "abort"     # Raise InvalidLiteralError, nothing is encoded
    SKIP = "skip"       # Drop the triple and log a warning


class ConfigValidationError(Exception):
    """Configuration validation error."""
    pass


@dataclass
class CodecConfig:
    """
    Options shared by the document codec and the file collaborator.

    DEFAULT_CONFIG is used wherever a config argument is omitted.
    """
    encoding: str = "utf-8"
    lowercase_language_tags: bool = True
    invalid_literal_policy: InvalidLiteralPolicy = InvalidLiteralPolicy.ABORT
    trailing_newline: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "encoding": self.encoding,
            "lowercase_language_tags": self.lowercase_language_tags,
            "invalid_literal_policy": self.invalid_literal_policy.value,
            "trailing_newline": self.trailing_newline,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CodecConfig":
        policy_str = data.get("invalid_literal_policy", "abort")
        try:
            policy = InvalidLiteralPolicy(policy_str)
        except ValueError:
            logger.warning(f"Unknown invalid_literal_policy {policy_str!r}, using 'abort'")
            policy = InvalidLiteralPolicy.ABORT

        return cls(
            encoding=data.get("encoding", "utf-8"),
            lowercase_language_tags=data.get("lowercase_language_tags", True),
            invalid_literal_policy=policy,
            trailing_newline=data.get("trailing_newline", True),
        )

    def validate(self) -> List[str]:
        """
        Validate configuration.

        Returns list of error messages (empty if valid).
        """
        errors = []

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            errors.append(f"Unknown text encoding: {self.encoding}")

        if not isinstance(self.invalid_literal_policy, InvalidLiteralPolicy):
            errors.append(f"Invalid invalid_literal_policy: {self.invalid_literal_policy!r}")

        return errors

    def validate_or_raise(self) -> None:
        """Validate configuration, raising on errors."""
        errors = self.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))

    def save(self, path: Path) -> None:
        """Save configuration to a directory."""
        config_file = Path(path) / CONFIG_FILENAME
        with open(config_file, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Path) -> "CodecConfig":
        """Load configuration from a directory; defaults if none is saved."""
        config_file = Path(path) / CONFIG_FILENAME
        if config_file.exists():
            with open(config_file, "r", encoding="utf-8") as f:
                data = json.load(f)
            config = cls.from_dict(data)
            config.validate_or_raise()
            return config
        return cls()


DEFAULT_CONFIG = CodecConfig()
