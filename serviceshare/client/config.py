# serviceshare/client/config.py
import json
from pathlib import Path

from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..crypto import AES_KEY_SIZE
from ..errors import ConfigError
from ..protocol.types import DEFAULT_API_URL, DEFAULT_TIMEOUT, DEFAULT_VERSION


class ClientConfig(BaseSettings):
    """
    Everything a Client needs, validated once at construction and frozen.

    Read from keyword arguments first, then SS_* environment variables
    (SS_API_URL, SS_MERCHANT_ID, SS_AES_KEY, SS_PRIVATE_KEY,
    SS_PLATFORM_PUBLIC_KEY, ...), then an optional .env file.
    """

    api_url: str = DEFAULT_API_URL
    merchant_id: str = ""
    version: str = DEFAULT_VERSION

    # AES-256 payload key, exactly 32 bytes
    aes_key: str = ""

    # merchant RSA private key (PEM PKCS#1/PKCS#8 or bare base64 DER)
    private_key: str = ""

    # platform RSA public key (PEM PKIX/PKCS#1 or bare base64 DER)
    platform_public_key: str = ""

    timeout: float = DEFAULT_TIMEOUT  # seconds

    # refuse responses that carry resData without a sign
    require_response_signature: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_prefix="SS_",
        frozen=True,
    )

    @field_validator("api_url", "merchant_id", "aes_key", "private_key", "platform_public_key")
    @classmethod
    def _required(cls, v: str, info) -> str:
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v

    @field_validator("aes_key")
    @classmethod
    def _aes_key_len(cls, v: str) -> str:
        if len(v.encode("utf-8")) != AES_KEY_SIZE:
            raise ValueError(f"aes_key must be exactly {AES_KEY_SIZE} bytes")
        return v

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data):
        # empty version means "use the default"
        if isinstance(data, dict):
            if "version" in data and not data["version"]:
                data["version"] = DEFAULT_VERSION
        return data

    @field_validator("timeout")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        # runs after coercion, so SS_TIMEOUT="0" lands here as 0.0
        if v < 0:
            raise ValueError("timeout must not be negative")
        if v == 0:
            return DEFAULT_TIMEOUT
        return v


def build_config(**kwargs) -> ClientConfig:
    """ClientConfig(**kwargs) with pydantic errors reported as ConfigError."""
    try:
        return ClientConfig(**kwargs)
    except ValidationError as e:
        raise ConfigError(f"invalid configuration: {e}") from e


def load_client_cfg(cfg_path: str) -> ClientConfig:
    """Read a JSON config file with the same field names as ClientConfig."""
    try:
        cfg = json.loads(Path(cfg_path).read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"invalid configuration: cannot read {cfg_path}: {e}") from e
    if not isinstance(cfg, dict):
        raise ConfigError(f"invalid configuration: {cfg_path} must hold a JSON object")
    return build_config(**cfg)
