from .config import ClientConfig, build_config, load_client_cfg
from .notifications import verify_and_decrypt_notification, notification_ack
from .transport import Client

__all__ = [
    "Client",
    "ClientConfig", "build_config", "load_client_cfg",
    "verify_and_decrypt_notification", "notification_ack",
]
