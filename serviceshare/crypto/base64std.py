'''
    Description:
        - Standard (padded, "+/") base64 used for every binary field on the
          ServiceShare wire: ciphertext in reqData/resData and the RSA `sign`.
'''

# ========== Imports ==========
import base64
import binascii


# ========== Base64 Encoding ==========
def b64_encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


# ========== Base64 Decoding ==========
def b64_decode(text) -> bytes:
    # line breaks are tolerated, any other non-alphabet character is an error
    if isinstance(text, bytes):
        text = text.decode("ascii")
    cleaned = text.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"invalid base64: {e}") from e
