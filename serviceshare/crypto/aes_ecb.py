'''
    AES-256-ECB with PKCS5 padding

    The platform encrypts reqData / resData block by block with no IV and no
    chaining. Output must be byte-identical to the platform's.
'''

# ========== Imports ==========
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..errors import EncryptionError, DecryptionError
from .base64std import b64_encode, b64_decode

AES_KEY_SIZE = 32
BLOCK_SIZE = algorithms.AES.block_size // 8   # 16


def _as_bytes(data) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else data


# ========== PKCS5 padding ==========

def pkcs5_pad(data: bytes, block_size: int = BLOCK_SIZE) -> bytes:
    # always pads, a full block when already aligned
    padding = block_size - len(data) % block_size
    return data + bytes([padding]) * padding


def pkcs5_unpad(data: bytes) -> bytes:
    length = len(data)
    if length == 0:
        raise ValueError("data is empty")

    padding = data[-1]
    if padding == 0 or padding > length:
        raise ValueError("invalid padding")
    if data[-padding:] != bytes([padding]) * padding:
        raise ValueError("invalid padding bytes")
    return data[:-padding]


# ========== AES-ECB Encryption ==========

def encrypt_aes(plaintext, key) -> str:
    key = _as_bytes(key)
    if len(key) != AES_KEY_SIZE:
        raise EncryptionError("encryption failed: AES-256 key must be 32 bytes")

    padded = pkcs5_pad(_as_bytes(plaintext))
    try:
        encryptor = Cipher(algorithms.AES(key), modes.ECB()).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
    except ValueError as e:
        raise EncryptionError(f"encryption failed: {e}") from e
    return b64_encode(ciphertext)


# ========== AES-ECB Decryption ==========

def decrypt_aes(ciphertext, key) -> str:
    key = _as_bytes(key)
    if len(key) != AES_KEY_SIZE:
        raise DecryptionError("decryption failed: AES-256 key must be 32 bytes")

    try:
        raw = b64_decode(ciphertext)
    except ValueError as e:
        raise DecryptionError(f"decryption failed: {e}") from e

    if len(raw) % BLOCK_SIZE != 0:
        raise DecryptionError("decryption failed: ciphertext is not a multiple of block size")

    try:
        decryptor = Cipher(algorithms.AES(key), modes.ECB()).decryptor()
        padded = decryptor.update(raw) + decryptor.finalize()
        return pkcs5_unpad(padded).decode("utf-8")
    except ValueError as e:   # UnicodeDecodeError is a ValueError too
        raise DecryptionError(f"decryption failed: {e}") from e
