# serviceshare/crypto/rsa_sha1.py
from __future__ import annotations
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives import hashes

from ..errors import SignatureError, VerificationError
from .base64std import b64_encode, b64_decode


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


def rsa_sign_sha1(private_key, data: str | bytes) -> str:
    """
    RSA PKCS#1 v1.5 over SHA-1 of `data`, base64 encoded.
    `data` is the already-encrypted reqData string, never the plaintext.
    """
    if private_key is None:
        raise SignatureError("signature generation failed: private key is missing")
    try:
        signature = private_key.sign(_as_bytes(data), padding.PKCS1v15(), hashes.SHA1())
    except (ValueError, TypeError) as e:
        raise SignatureError(f"signature generation failed: {e}") from e
    return b64_encode(signature)


def rsa_verify_sha1(public_key, data: str | bytes, signature_b64: str) -> None:
    """
    Raises VerificationError unless `signature_b64` is a valid RSA-SHA1
    signature of `data` under `public_key`.
    """
    if public_key is None:
        raise VerificationError("signature verification failed: public key is missing")
    try:
        signature = b64_decode(signature_b64)
    except ValueError as e:
        raise VerificationError(f"signature verification failed: {e}") from e
    try:
        public_key.verify(signature, _as_bytes(data), padding.PKCS1v15(), hashes.SHA1())
    except InvalidSignature as e:
        raise VerificationError("signature verification failed: signature does not match data") from e
