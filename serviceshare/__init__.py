"""
ServiceShare envelope client.

Packs business requests into signed, AES-encrypted envelopes, sends them to
the ServiceShare gateway and unpacks signed responses and platform
notifications.
"""

from .client import Client, ClientConfig, build_config, load_client_cfg, notification_ack
from .envelope import RequestMessage, ResponseMessage, NotificationMessage
from .errors import (
    ServiceShareError,
    ConfigError,
    InvalidKeyError,
    EncryptionError,
    DecryptionError,
    SignatureError,
    VerificationError,
    MissingSignatureError,
    RequestError,
    InvalidResponseError,
    APIError,
    lookup_api_error,
)

__version__ = "0.1.0"

__all__ = [
    "Client", "ClientConfig", "build_config", "load_client_cfg", "notification_ack",
    "RequestMessage", "ResponseMessage", "NotificationMessage",
    "ServiceShareError", "ConfigError", "InvalidKeyError",
    "EncryptionError", "DecryptionError", "SignatureError",
    "VerificationError", "MissingSignatureError",
    "RequestError", "InvalidResponseError", "APIError", "lookup_api_error",
]
