import json

import pytest
from pydantic import ValidationError

from serviceshare.client import Client, build_config, load_client_cfg
from serviceshare.errors import ConfigError, InvalidKeyError
from serviceshare.protocol.types import DEFAULT_API_URL

from .conftest import AES_KEY, API_URL, MERCHANT_ID


@pytest.fixture
def fields(merchant_keys, platform_keys):
    return {
        "api_url": API_URL,
        "merchant_id": MERCHANT_ID,
        "aes_key": AES_KEY,
        "private_key": merchant_keys[0].decode(),
        "platform_public_key": platform_keys[1].decode(),
    }


def test_defaults_filled(fields):
    cfg = build_config(**fields)
    assert cfg.version == "V1.0"
    assert cfg.timeout == 60
    assert cfg.require_response_signature is False


def test_empty_version_and_zero_timeout_get_defaults(fields):
    cfg = build_config(version="", timeout=0, **fields)
    assert cfg.version == "V1.0"
    assert cfg.timeout == 60


@pytest.mark.parametrize("missing", ["api_url", "merchant_id", "aes_key", "private_key", "platform_public_key"])
def test_required_fields(fields, missing):
    fields[missing] = ""
    with pytest.raises(ConfigError, match=missing):
        build_config(**fields)


@pytest.mark.parametrize("key", ["short", AES_KEY + "1", "0123456789012345"])
def test_aes_key_must_be_32_bytes(fields, key):
    fields["aes_key"] = key
    with pytest.raises(ConfigError, match="32 bytes"):
        build_config(**fields)


def test_config_is_frozen(fields):
    cfg = build_config(**fields)
    with pytest.raises(ValidationError):
        cfg.merchant_id = "other"


def test_config_from_environment(monkeypatch, fields):
    monkeypatch.setenv("SS_MERCHANT_ID", "from-env")
    monkeypatch.setenv("SS_AES_KEY", AES_KEY)
    monkeypatch.setenv("SS_PRIVATE_KEY", fields["private_key"])
    monkeypatch.setenv("SS_PLATFORM_PUBLIC_KEY", fields["platform_public_key"])
    monkeypatch.setenv("SS_TIMEOUT", "30")
    monkeypatch.setenv("SS_REQUIRE_RESPONSE_SIGNATURE", "true")
    monkeypatch.delenv("SS_API_URL", raising=False)

    client = Client.from_env()
    assert client.config.merchant_id == "from-env"
    assert client.config.api_url == DEFAULT_API_URL
    assert client.config.timeout == 30
    assert client.config.require_response_signature is True
    client.close()


@pytest.mark.parametrize("raw", ["0", "0.0"])
def test_zero_timeout_from_environment_gets_default(monkeypatch, fields, raw):
    monkeypatch.setenv("SS_TIMEOUT", raw)
    cfg = build_config(**fields)
    assert cfg.timeout == 60


def test_negative_timeout_rejected(fields):
    with pytest.raises(ConfigError, match="timeout"):
        build_config(timeout=-1, **fields)


def test_load_client_cfg(tmp_path, fields):
    path = tmp_path / "serviceshare.json"
    path.write_text(json.dumps(fields), encoding="utf-8")
    cfg = load_client_cfg(str(path))
    assert cfg.merchant_id == MERCHANT_ID
    assert cfg.aes_key == AES_KEY


def test_load_client_cfg_errors(tmp_path):
    with pytest.raises(ConfigError):
        load_client_cfg(str(tmp_path / "missing.json"))
    bad = tmp_path / "bad.json"
    bad.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_client_cfg(str(bad))


def test_client_rejects_bad_keys(fields):
    cfg = build_config(**{**fields, "private_key": "bm90IGEga2V5"})
    with pytest.raises(InvalidKeyError, match="private key"):
        Client(cfg)

    cfg = build_config(**{**fields, "platform_public_key": fields["private_key"]})
    with pytest.raises(InvalidKeyError, match="platform public key"):
        Client(cfg)
