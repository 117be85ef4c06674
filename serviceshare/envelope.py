# serviceshare/envelope.py
"""
Envelope helpers
----------------
The two wire shapes of the ServiceShare API and their JSON codec.

Outbound requests (and inbound platform notifications) use RequestMessage;
replies use ResponseMessage. Both carry the business payload as an opaque
AES-ECB ciphertext (`reqData` / `resData`) and an RSA-SHA1 `sign` computed
over that ciphertext string, so a signature can be checked before anything
is decrypted.
"""

from __future__ import annotations
import json
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .crypto import rsa_sign_sha1, rsa_verify_sha1
from .errors import APIError, InvalidResponseError
from .protocol.rpc import new_req_id
from .protocol.types import (
    DEFAULT_VERSION,
    F_FUN_CODE,
    F_MER_ID,
    F_REQ_DATA,
    F_REQ_ID,
    F_RES_CODE,
    F_RES_DATA,
    F_RES_MSG,
    F_SIGN,
    F_VERSION,
    RES_CODE_SUCCESS,
)

RawBody = Union[bytes, bytearray, str]


class _Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    req_id: str = Field(default="", alias=F_REQ_ID)
    fun_code: str = Field(default="", alias=F_FUN_CODE)
    mer_id: str = Field(default="", alias=F_MER_ID)
    version: str = Field(default="", alias=F_VERSION)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        # JSON null decodes to the zero value, like a missing field
        return "" if v is None else v

    def to_json(self) -> bytes:
        return self.model_dump_json(by_alias=True).encode("utf-8")

    @classmethod
    def parse(cls, raw: RawBody):
        """Decode a wire body. Raises InvalidResponseError on anything malformed."""
        try:
            obj = json.loads(raw)
        except (ValueError, TypeError) as e:
            raise InvalidResponseError(f"invalid response: failed to unmarshal {cls.__name__}: {e}") from e
        if not isinstance(obj, dict):
            raise InvalidResponseError(f"invalid response: {cls.__name__} must be a JSON object")
        try:
            return cls.model_validate(obj)
        except ValidationError as e:
            raise InvalidResponseError(f"invalid response: failed to unmarshal {cls.__name__}: {e}") from e


class RequestMessage(_Envelope):
    req_data: str = Field(default="", alias=F_REQ_DATA)
    sign: str = Field(default="", alias=F_SIGN)


class NotificationMessage(RequestMessage):
    """Platform push. Some pushes arrive in the response shape, with resData instead of reqData."""
    res_data: str = Field(default="", alias=F_RES_DATA)

    @property
    def payload(self) -> str:
        return self.req_data or self.res_data


class ResponseMessage(_Envelope):
    res_data: str = Field(default="", alias=F_RES_DATA)
    res_code: str = Field(default="", alias=F_RES_CODE)
    res_msg: str = Field(default="", alias=F_RES_MSG)
    sign: str = Field(default="", alias=F_SIGN)

    def is_success(self) -> bool:
        return self.res_code == RES_CODE_SUCCESS

    def get_error(self) -> Optional[APIError]:
        if self.is_success():
            return None
        return APIError(self.res_code, self.res_msg)

    def raise_for_code(self) -> None:
        err = self.get_error()
        if err is not None:
            raise err


def make_envelope(
    fun_code: str,
    mer_id: str,
    req_data: str,
    *,
    version: str = DEFAULT_VERSION,
    sign_with=None,
    req_id: Optional[str] = None,
) -> RequestMessage:
    """Build a request frame around an already-encrypted payload. If sign_with is provided, sign it."""
    msg = RequestMessage(
        req_id=req_id or new_req_id(),
        fun_code=fun_code,
        mer_id=mer_id,
        version=version,
        req_data=req_data,
    )
    if sign_with is not None:
        msg.sign = rsa_sign_sha1(sign_with, msg.req_data)
    return msg


def verify_envelope_signature(msg: Union[RequestMessage, NotificationMessage, ResponseMessage], public_key) -> None:
    """Raise VerificationError unless msg.sign covers its encrypted payload."""
    if isinstance(msg, NotificationMessage):
        data = msg.payload
    elif isinstance(msg, RequestMessage):
        data = msg.req_data
    else:
        data = msg.res_data
    rsa_verify_sha1(public_key, data, msg.sign)
