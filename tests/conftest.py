"""
Pytest configuration and shared fixtures.

Provides sample identifier values and an isolated configuration environment
(temp XDG home, temp working directory, no MOI_ID_* variables) used across
the test suite.
"""

import os
from pathlib import Path

import pytest

from moi_identifiers.core.config import clear_cache

# ==============================================================================
# Sample identifiers
# ==============================================================================

FINGERPRINT = bytes.fromhex("010203040506070811121314151617182122232425262728")

# tag 0x10, flags asset_stateful, standard 0x0010, variant 0x42
ASSET_HEX = "0x1001001001020304050607081112131415161718212223242526272800000042"

# tag 0x00, flags systemic
PARTICIPANT_HEX = "0x0080000001020304050607081112131415161718212223242526272800000000"

# tag 0x20, flags intrinsic | extrinsic, variant 7
LOGIC_HEX = "0x2003000001020304050607081112131415161718212223242526272800000007"


@pytest.fixture
def fingerprint() -> bytes:
    """The 24-byte fingerprint used by the sample identifiers."""
    return FINGERPRINT


@pytest.fixture
def asset_hex() -> str:
    return ASSET_HEX


@pytest.fixture
def participant_hex() -> str:
    return PARTICIPANT_HEX


@pytest.fixture
def logic_hex() -> str:
    return LOGIC_HEX


@pytest.fixture
def with_byte():
    """Return a helper that replaces one byte of a hex identifier."""

    def _with_byte(hex_value: str, index: int, value: int) -> str:
        raw = bytearray(bytes.fromhex(hex_value[2:]))
        raw[index] = value
        return "0x" + raw.hex()

    return _with_byte


# ==============================================================================
# Environment isolation
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """
    Keep every test away from the real config and .env files.

    Points XDG_CONFIG_HOME at a temp dir, runs in a temp working directory,
    clears MOI_ID_* variables and the config cache.
    """
    xdg_home = tmp_path / "xdg"
    xdg_home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_home))
    monkeypatch.chdir(workdir)
    for key in list(os.environ):
        if key.startswith("MOI_ID_"):
            monkeypatch.delenv(key)

    clear_cache()
    yield workdir
    clear_cache()

    # load_layered_env writes to os.environ directly
    for key in list(os.environ):
        if key.startswith("MOI_ID_"):
            del os.environ[key]


@pytest.fixture
def user_config_dir(tmp_path) -> Path:
    """The moi-identifiers directory under the isolated XDG_CONFIG_HOME."""
    config_dir = tmp_path / "xdg" / "moi-identifiers"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@pytest.fixture
def project_dir(isolated_config) -> Path:
    """The isolated working directory, where .moi-id.json and .env are read."""
    return isolated_config
