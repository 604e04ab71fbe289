import logging
import os

import pytest
from pydantic import ValidationError

from hkdf_engine.config import Settings, configure_logging, get_settings
from hkdf_engine.key_derivation import derive_key, extract, expand, hkdf_sha512
from hkdf_engine.mac import HMAC_SHA256


class TestSettings:

    def test_defaults(self):
        settings = Settings()
        assert settings.default_algorithm == "sha256"
        assert settings.default_key_length == 32
        assert settings.log_level == "INFO"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("HKDF_DEFAULT_ALGORITHM", "sha512")
        monkeypatch.setenv("HKDF_DEFAULT_KEY_LENGTH", "64")
        monkeypatch.setenv("HKDF_LOG_LEVEL", "DEBUG")
        settings = Settings()
        assert settings.default_algorithm == "sha512"
        assert settings.default_key_length == 64
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["SHA-512", "hmac_sha512", "HMAC-SHA512"])
    def test_algorithm_name_normalized(self, raw):
        assert Settings(default_algorithm=raw).default_algorithm == "sha512"

    def test_unknown_algorithm_rejected(self):
        with pytest.raises(ValidationError):
            Settings(default_algorithm="md5")

    def test_non_positive_key_length_rejected(self):
        with pytest.raises(ValidationError):
            Settings(default_key_length=0)

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_derive_key_follows_settings(self, monkeypatch):
        ikm = os.urandom(32)
        monkeypatch.setenv("HKDF_DEFAULT_ALGORITHM", "sha512")
        monkeypatch.setenv("HKDF_DEFAULT_KEY_LENGTH", "48")
        get_settings.cache_clear()

        key = derive_key(ikm, b"context")

        assert len(key) == 48
        assert key == hkdf_sha512(ikm, None, b"context", 48)


class TestLogging:

    @pytest.fixture
    def package_logger(self):
        logger = logging.getLogger("hkdf_engine")
        handlers = list(logger.handlers)
        level = logger.level
        yield logger
        logger.handlers = handlers
        logger.setLevel(level)

    def test_configure_logging_sets_level(self, package_logger):
        configure_logging(Settings(log_level="DEBUG"))
        assert package_logger.level == logging.DEBUG

    def test_configure_logging_is_idempotent(self, package_logger):
        before = len(package_logger.handlers)
        configure_logging(Settings())
        configure_logging(Settings())
        assert len(package_logger.handlers) == before + 1

    def test_debug_records_omit_key_material(self, caplog):
        ikm = bytes.fromhex("ab" * 32)
        salt = bytes.fromhex("cd" * 16)
        info = b"super-secret-context"

        with caplog.at_level(logging.DEBUG, logger="hkdf_engine"):
            prk = extract(HMAC_SHA256, ikm, salt)
            expand(HMAC_SHA256, prk, info, 64)

        assert "HKDF extract" in caplog.text
        assert "2 block(s)" in caplog.text
        for secret in (ikm.hex(), salt.hex(), prk.hex(), info.decode()):
            assert secret not in caplog.text
