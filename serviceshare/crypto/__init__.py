'''
    Description:
        - Cryptographic primitives of the ServiceShare envelope: standard base64,
          payload JSON stabilisation, RSA key loading, AES-256-ECB payload
          encryption and RSA-SHA1 signing/verification.
        - Consolidated here for easy import across the package.
'''

from .base64std import b64_encode, b64_decode
from .json_format import stabilise_json
from .rsa_key_management import generate_rsa_keypair, public_key_pem, load_public_key, load_private_key
from .aes_ecb import encrypt_aes, decrypt_aes, pkcs5_pad, pkcs5_unpad, AES_KEY_SIZE, BLOCK_SIZE
from .rsa_sha1 import rsa_sign_sha1, rsa_verify_sha1

__all__ = [
    "b64_encode", "b64_decode",
    "stabilise_json",
    "load_public_key", "load_private_key", "generate_rsa_keypair", "public_key_pem",
    "encrypt_aes", "decrypt_aes", "pkcs5_pad", "pkcs5_unpad", "AES_KEY_SIZE", "BLOCK_SIZE",
    "rsa_sign_sha1", "rsa_verify_sha1",
]
