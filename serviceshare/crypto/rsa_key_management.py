'''
    Description:
        - RSA key management: loading the merchant private key and the
          platform public key from PEM or raw base64 DER, plus key generation
          for provisioning and tests.

    Accepted formats:
        - private: PKCS#8 ("BEGIN PRIVATE KEY") or PKCS#1 ("BEGIN RSA PRIVATE KEY")
        - public:  PKIX ("BEGIN PUBLIC KEY") or PKCS#1 ("BEGIN RSA PUBLIC KEY")
        - either of the above without the PEM armour, as one base64 string
'''

import re

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey, RSAPrivateKey

from ..errors import InvalidKeyError
from .base64std import b64_decode

_PEM_BLOCK = re.compile(
    r"-----BEGIN ([A-Z0-9 ]+)-----\s*(.*?)\s*-----END \1-----",
    re.DOTALL,
)


def generate_rsa_keypair(bits: int = 2048) -> tuple[bytes, bytes]:
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption()
    )
    public_pem = public_key_pem(private_key.public_key())
    return private_pem, public_pem


def public_key_pem(public_key: RSAPublicKey) -> bytes:
    return public_key.public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo
    )


def _key_der(key_text) -> bytes:
    """PEM block body if there is one, otherwise the whole string as base64."""
    if isinstance(key_text, bytes):
        key_text = key_text.decode("utf-8")
    key_text = key_text.replace("\r\n", "\n").strip()

    block = _PEM_BLOCK.search(key_text)
    if block is not None:
        body = block.group(2)
        if ":" in body:
            raise InvalidKeyError("invalid key format: encrypted PEM blocks are not supported")
        try:
            return b64_decode("".join(body.split()))
        except ValueError as e:
            raise InvalidKeyError(f"invalid key format: bad PEM body: {e}") from e

    try:
        return b64_decode(key_text)
    except ValueError as e:
        raise InvalidKeyError(f"invalid key format: failed to decode PEM block or base64: {e}") from e


def load_private_key(private_pem_or_obj) -> RSAPrivateKey:
    if isinstance(private_pem_or_obj, RSAPrivateKey):
        return private_pem_or_obj
    if not private_pem_or_obj:
        raise InvalidKeyError("invalid key format: private key is empty")

    der = _key_der(private_pem_or_obj)
    # load_der_private_key tries PKCS#8 first, then the traditional PKCS#1 layout
    try:
        key = serialization.load_der_private_key(der, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise InvalidKeyError(f"invalid key format: {e}") from e
    if not isinstance(key, RSAPrivateKey):
        raise InvalidKeyError("invalid key format: not an RSA private key")
    return key


def load_public_key(public_pem_or_obj) -> RSAPublicKey:
    if isinstance(public_pem_or_obj, RSAPublicKey):
        return public_pem_or_obj
    if not public_pem_or_obj:
        raise InvalidKeyError("invalid key format: public key is empty")

    der = _key_der(public_pem_or_obj)
    # SubjectPublicKeyInfo first, then a bare PKCS#1 RSAPublicKey
    try:
        key = serialization.load_der_public_key(der)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise InvalidKeyError(f"invalid key format: {e}") from e
    if not isinstance(key, RSAPublicKey):
        raise InvalidKeyError("invalid key format: not an RSA public key")
    return key
