'''
    Description:
        - Verification of asynchronous notifications pushed by the platform
          (sign results, payment results). The platform acts as the requester
          here: it signs the encrypted payload with its private key and we
          check it with the platform public key we already hold.
        - Also builds the small JSON acknowledgement the platform expects back.
'''

from __future__ import annotations
from typing import Union

from ..crypto import decrypt_aes
from ..envelope import NotificationMessage, verify_envelope_signature
from ..errors import (
    DecryptionError,
    InvalidResponseError,
    MissingSignatureError,
    VerificationError,
)
from ..protocol.types import RES_CODE_FAILED, RES_CODE_SUCCESS


# ========== Notification verification ==========

def verify_and_decrypt_notification(body: Union[bytes, str], public_key, aes_key) -> str:
    """
    Verify a notification body and return its decrypted JSON text
    ("" when the notification carries no payload).
    """
    try:
        msg = NotificationMessage.parse(body)
    except InvalidResponseError as e:
        raise InvalidResponseError(f"failed to unmarshal notification envelope: {e}") from e

    # checked before anything is decrypted
    if not msg.sign:
        raise MissingSignatureError("missing signature in notification")

    try:
        verify_envelope_signature(msg, public_key)
    except VerificationError as e:
        raise VerificationError(f"notification signature verification failed: {e}") from e

    if not msg.payload:
        return ""

    try:
        return decrypt_aes(msg.payload, aes_key)
    except DecryptionError as e:
        raise DecryptionError(f"failed to decrypt notification data: {e}") from e


# ========== Acknowledgement ==========

def notification_ack(ok: bool = True, message: str = "") -> dict:
    if ok:
        return {"resCode": RES_CODE_SUCCESS, "resMsg": message or "Success"}
    return {"resCode": RES_CODE_FAILED, "resMsg": message or "Failed"}
