# serviceshare/client/transport.py

'''Client for the ServiceShare business gateway.

One public call, `Client.do(fun_code, payload)`: the payload is serialised,
AES-encrypted, wrapped in a signed RequestMessage and POSTed; the reply
envelope is parsed, its resCode checked, its signature verified and its
resData decrypted back to plain JSON text.

Config and parsed keys are read-only and every call builds its own
envelopes. The HTTP session is not: requests.Session keeps a mutable cookie
jar and is not documented as thread-safe, so concurrent callers should give
each thread its own Client, or inject a per-thread `session=`.'''

from __future__ import annotations
import json
import logging
from typing import Any, Optional

import requests

from ..crypto import (
    decrypt_aes,
    encrypt_aes,
    load_private_key,
    load_public_key,
    rsa_sign_sha1,
    stabilise_json,
)
from ..envelope import RequestMessage, ResponseMessage, make_envelope, verify_envelope_signature
from ..errors import (
    DecryptionError,
    EncryptionError,
    InvalidKeyError,
    InvalidResponseError,
    RequestError,
    SignatureError,
    VerificationError,
)
from ..protocol.rpc import ReqIdFactory, new_req_id
from ..protocol.types import REQUEST_HEADERS
from .config import ClientConfig, build_config
from .notifications import verify_and_decrypt_notification

log = logging.getLogger("serviceshare.transport")


class Client:
    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
        req_id_factory: ReqIdFactory = new_req_id,
    ):
        self.config = config
        try:
            self.private_key = load_private_key(config.private_key)
        except InvalidKeyError as e:
            raise InvalidKeyError(f"failed to parse private key: {e}") from e
        try:
            self.public_key = load_public_key(config.platform_public_key)
        except InvalidKeyError as e:
            raise InvalidKeyError(f"failed to parse platform public key: {e}") from e

        self._owns_session = session is None
        self.session = session or requests.Session()
        self._new_req_id = req_id_factory

    @classmethod
    def from_env(cls, **overrides) -> "Client":
        """Client configured from SS_* environment variables (and .env)."""
        return cls(build_config(**overrides))

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ---------- outbound ----------

    def build_request(self, fun_code: str, payload: Any) -> RequestMessage:
        """Steps 1-5 of a call: request id, JSON, encrypt, envelope, sign."""
        req_id = self._new_req_id()

        try:
            plain = stabilise_json(payload).decode("utf-8")
        except (TypeError, ValueError) as e:
            raise EncryptionError(f"failed to marshal request data: {e}") from e

        log.info("service share api request | funCode: %s | reqId: %s | reqData: %s", fun_code, req_id, plain)

        try:
            encrypted = encrypt_aes(plain, self.config.aes_key)
        except EncryptionError as e:
            raise EncryptionError(f"failed to encrypt request data: {e}") from e

        msg = make_envelope(
            fun_code,
            self.config.merchant_id,
            encrypted,
            version=self.config.version,
            req_id=req_id,
        )
        try:
            msg.sign = rsa_sign_sha1(self.private_key, msg.req_data)
        except SignatureError as e:
            raise SignatureError(f"failed to sign request data: {e}") from e
        return msg

    def _post(self, msg: RequestMessage) -> bytes:
        try:
            resp = self.session.post(
                self.config.api_url,
                data=msg.to_json(),
                headers=REQUEST_HEADERS,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            raise RequestError(f"request failed: {e}") from e

        body = resp.content
        if resp.status_code != 200:
            log.error(
                "service share api response not ok | funCode: %s | reqId: %s | status_code: %d | respBody: %s",
                msg.fun_code, msg.req_id, resp.status_code, body.decode("utf-8", errors="replace"),
            )
            raise RequestError(f"request failed: HTTP {resp.status_code}")

        log.info("service share api response | funCode: %s | reqId: %s | respBody: %s",
                 msg.fun_code, msg.req_id, body.decode("utf-8", errors="replace"))
        return body

    def do(self, fun_code: str, payload: Any) -> str:
        """
        Execute one API call. Returns the decrypted resData JSON text, or ""
        when the platform answered success with no business payload.

        `payload` may be a dict, list, pydantic model or dataclass, which is
        serialised to JSON here. A `str` or `bytes` payload is sent as-is and
        must already be JSON text: "abc" is not encoded to '"abc"'.

        Raises APIError (unwrapped) when resCode is not "0000".
        """
        msg = self.build_request(fun_code, payload)
        body = self._post(msg)

        try:
            reply = ResponseMessage.parse(body)
        except InvalidResponseError:
            log.error("service share api response parse failed | funCode: %s | reqId: %s | respBody: %s",
                      fun_code, msg.req_id, body.decode("utf-8", errors="replace"))
            raise

        reply.raise_for_code()

        if reply.sign and reply.res_data:
            try:
                verify_envelope_signature(reply, self.public_key)
            except VerificationError as e:
                raise VerificationError(f"response signature verification failed: {e}") from e
        elif reply.res_data:
            if self.config.require_response_signature:
                raise VerificationError("response signature verification failed: resData is not signed")
            log.warning("service share api response unsigned, verification skipped | funCode: %s | reqId: %s",
                        fun_code, msg.req_id)

        if not reply.res_data:
            return ""

        try:
            decrypted = decrypt_aes(reply.res_data, self.config.aes_key)
        except DecryptionError as e:
            raise DecryptionError(f"failed to decrypt response data: {e}") from e

        log.info("service share api response decrypt | funCode: %s | reqId: %s | decryptedData: %s",
                 fun_code, msg.req_id, decrypted)
        return decrypted

    def do_json(self, fun_code: str, payload: Any) -> Any:
        """do() with the result parsed; None when there is no business payload."""
        data = self.do(fun_code, payload)
        if not data:
            return None
        try:
            return json.loads(data)
        except ValueError as e:
            raise InvalidResponseError(f"invalid response: resData is not JSON: {e}") from e

    # ---------- inbound ----------

    def verify_and_decrypt_notification(self, body) -> str:
        return verify_and_decrypt_notification(body, self.public_key, self.config.aes_key)
