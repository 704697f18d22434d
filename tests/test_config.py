"""Tests for codec configuration."""
import json

import pytest

from ntriples_collection.config import (
    CONFIG_FILENAME,
    DEFAULT_CONFIG,
    CodecConfig,
    ConfigValidationError,
    InvalidLiteralPolicy,
)


# ========== InvalidLiteralPolicy Tests ==========

class TestInvalidLiteralPolicy:
    def test_values(self):
        assert InvalidLiteralPolicy.ABORT.value == "abort"
        assert InvalidLiteralPolicy.SKIP.value == "skip"


# ========== CodecConfig Tests ==========

class TestCodecConfig:
    def test_defaults(self):
        config = CodecConfig()
        assert config.encoding == "utf-8"
        assert config.lowercase_language_tags is True
        assert config.invalid_literal_policy == InvalidLiteralPolicy.ABORT
        assert config.trailing_newline is True

    def test_default_instance(self):
        assert DEFAULT_CONFIG == CodecConfig()

    def test_to_dict(self):
        d = CodecConfig(invalid_literal_policy=InvalidLiteralPolicy.SKIP).to_dict()
        assert d["invalid_literal_policy"] == "skip"
        assert d["encoding"] == "utf-8"

    def test_from_dict(self):
        config = CodecConfig.from_dict({"encoding": "latin-1", "trailing_newline": False})
        assert config.encoding == "latin-1"
        assert config.trailing_newline is False
        assert config.lowercase_language_tags is True

    def test_from_dict_invalid_policy(self):
        config = CodecConfig.from_dict({"invalid_literal_policy": "ignore"})
        assert config.invalid_literal_policy == InvalidLiteralPolicy.ABORT  # Default

    def test_validate(self):
        assert CodecConfig().validate() == []

    def test_validate_unknown_encoding(self):
        errors = CodecConfig(encoding="no-such-codec").validate()
        assert len(errors) == 1
        with pytest.raises(ConfigValidationError):
            CodecConfig(encoding="no-such-codec").validate_or_raise()

    def test_validate_bad_policy(self):
        config = CodecConfig(invalid_literal_policy="skip")
        assert len(config.validate()) == 1

    def test_save_and_load(self, tmp_path):
        config = CodecConfig(lowercase_language_tags=False, invalid_literal_policy=InvalidLiteralPolicy.SKIP)
        config.save(tmp_path)

        assert (tmp_path / CONFIG_FILENAME).exists()
        loaded = CodecConfig.load(tmp_path)
        assert loaded == config

    def test_load_missing_returns_defaults(self, tmp_path):
        assert CodecConfig.load(tmp_path) == CodecConfig()

    def test_load_invalid_raises(self, tmp_path):
        (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"encoding": "no-such-codec"}), encoding="utf-8")
        with pytest.raises(ConfigValidationError):
            CodecConfig.load(tmp_path)
