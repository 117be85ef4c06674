import asyncio
import json

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from serviceshare.client import notification_ack, verify_and_decrypt_notification
from serviceshare.crypto import encrypt_aes, load_private_key, load_public_key, rsa_sign_sha1
from serviceshare.envelope import RequestMessage
from serviceshare.errors import (
    DecryptionError,
    InvalidResponseError,
    MissingSignatureError,
    VerificationError,
)
from serviceshare.server import build_notify_router

from .conftest import AES_KEY, MERCHANT_ID


def _push(platform_private_pem, plain: str, *, field="reqData", signed=True) -> bytes:
    """Body of a platform push carrying `plain` in `field`."""
    data = encrypt_aes(plain, AES_KEY) if plain else ""
    obj = {"reqId": "1767000000000002", "funCode": "6010", "merId": MERCHANT_ID, "version": "V1.0", field: data}
    if signed:
        obj["sign"] = rsa_sign_sha1(load_private_key(platform_private_pem), data)
    return json.dumps(obj).encode("utf-8")


SIGN_RESULT = '{"contractId":"C-1","state":2}'


# ---------- verify_and_decrypt_notification ----------

def test_valid_notification_via_client(client, platform_keys):
    assert client.verify_and_decrypt_notification(_push(platform_keys[0], SIGN_RESULT)) == SIGN_RESULT


def test_valid_notification_as_str(platform_keys):
    body = _push(platform_keys[0], SIGN_RESULT).decode()
    assert verify_and_decrypt_notification(body, load_public_key(platform_keys[1]), AES_KEY) == SIGN_RESULT


def test_response_shaped_push(client, platform_keys):
    body = _push(platform_keys[0], SIGN_RESULT, field="resData")
    assert client.verify_and_decrypt_notification(body) == SIGN_RESULT


def test_missing_sign(client, platform_keys):
    with pytest.raises(MissingSignatureError, match="missing signature"):
        client.verify_and_decrypt_notification(_push(platform_keys[0], SIGN_RESULT, signed=False))


def test_missing_sign_is_a_verification_error(client, platform_keys):
    with pytest.raises(VerificationError):
        client.verify_and_decrypt_notification(_push(platform_keys[0], SIGN_RESULT, signed=False))


def test_forged_notification(client, merchant_keys):
    with pytest.raises(VerificationError, match="notification signature verification failed"):
        client.verify_and_decrypt_notification(_push(merchant_keys[0], SIGN_RESULT))


def test_empty_payload_with_valid_sign(client, platform_keys):
    assert client.verify_and_decrypt_notification(_push(platform_keys[0], "")) == ""


def test_signed_garbage_payload(client, platform_keys):
    data = "QUJD"
    msg = RequestMessage(req_data=data, sign=rsa_sign_sha1(load_private_key(platform_keys[0]), data))
    with pytest.raises(DecryptionError, match="failed to decrypt notification data"):
        client.verify_and_decrypt_notification(msg.to_json())


@pytest.mark.parametrize("body", [b"", b"{", b"[1]"])
def test_malformed_notification(client, body):
    with pytest.raises(InvalidResponseError, match="notification envelope"):
        client.verify_and_decrypt_notification(body)


def test_acks():
    assert notification_ack() == {"resCode": "0000", "resMsg": "Success"}
    assert notification_ack(False) == {"resCode": "9999", "resMsg": "Failed"}
    assert notification_ack(False, "bad sign") == {"resCode": "9999", "resMsg": "bad sign"}


# ---------- webhook router ----------

@pytest.fixture
def received():
    return []


@pytest.fixture
def webhook(client, received):
    app = FastAPI()
    app.include_router(build_notify_router(client, received.append, path="/notify/sign"))
    return TestClient(app)


def test_webhook_delivers_payload(webhook, received, platform_keys):
    r = webhook.post("/notify/sign", content=_push(platform_keys[0], SIGN_RESULT))
    assert r.status_code == 200
    assert r.json() == {"resCode": "0000", "resMsg": "Success"}
    assert received == [{"contractId": "C-1", "state": 2}]


def test_webhook_empty_payload(webhook, received, platform_keys):
    r = webhook.post("/notify/sign", content=_push(platform_keys[0], ""))
    assert r.json()["resCode"] == "0000"
    assert received == [None]


def test_webhook_rejects_forged_push(webhook, received, merchant_keys):
    r = webhook.post("/notify/sign", content=_push(merchant_keys[0], SIGN_RESULT))
    assert r.status_code == 200
    assert r.json() == {"resCode": "9999", "resMsg": "Failed"}
    assert received == []


def test_webhook_handler_failure(client, platform_keys):
    def boom(data):
        raise RuntimeError("db down")

    app = FastAPI()
    app.include_router(build_notify_router(client, boom))
    r = TestClient(app).post("/callback", content=_push(platform_keys[0], SIGN_RESULT))
    assert r.json()["resCode"] == "9999"


def test_webhook_handler_runs_off_the_event_loop(client, platform_keys):
    on_loop = []

    def handler(data):
        try:
            asyncio.get_running_loop()
            on_loop.append(True)
        except RuntimeError:
            on_loop.append(False)

    app = FastAPI()
    app.include_router(build_notify_router(client, handler))
    r = TestClient(app).post("/callback", content=_push(platform_keys[0], SIGN_RESULT))
    assert r.json()["resCode"] == "0000"
    assert on_loop == [False]
