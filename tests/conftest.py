import os
import sys
from pathlib import Path

import pytest
from cryptography.hazmat.primitives import hashes, hmac

project_path = Path(__file__).parent.parent
sys.path.insert(0, str(project_path))

from hkdf_engine.config import get_settings
from hkdf_engine.mac import MacFactory


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in list(os.environ):
        if name.upper().startswith("HKDF_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ikm():
    return os.urandom(32)


@pytest.fixture
def salt():
    return os.urandom(16)


@pytest.fixture
def info():
    return b"hkdf-engine-test-context"


@pytest.fixture
def rfc_ikm():
    return bytes.fromhex("0b" * 22)


@pytest.fixture
def rfc_salt():
    return bytes.fromhex("000102030405060708090a0b0c")


@pytest.fixture
def rfc_info():
    return bytes.fromhex("f0f1f2f3f4f5f6f7f8f9")


class RecordingMacFactory(MacFactory):
    """HMAC-SHA256 factory that records every key it is asked to use."""

    def __init__(self):
        self.keys = []

    @property
    def name(self) -> str:
        return "HMAC-SHA256-RECORDING"

    @property
    def output_length(self) -> int:
        return 32

    def create_mac(self, key: bytes) -> hmac.HMAC:
        self.keys.append(bytes(key))
        return hmac.HMAC(key, hashes.SHA256())


@pytest.fixture
def recording_mac():
    return RecordingMacFactory()
