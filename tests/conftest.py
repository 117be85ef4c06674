import pytest

from serviceshare.client import Client, build_config
from serviceshare.crypto import encrypt_aes, generate_rsa_keypair, load_private_key, rsa_sign_sha1
from serviceshare.envelope import ResponseMessage

AES_KEY = "01234567890123456789012345678901"[:32]
API_URL = "http://gateway.test/clientapi/clientBusiness/common"
MERCHANT_ID = "1763878666094686"


# ---------- keys ----------

@pytest.fixture(scope="session")
def merchant_keys():
    """(private_pem, public_pem) of the merchant, i.e. us."""
    return generate_rsa_keypair(2048)


@pytest.fixture(scope="session")
def platform_keys():
    """(private_pem, public_pem) of the platform we talk to."""
    return generate_rsa_keypair(2048)


@pytest.fixture
def config(merchant_keys, platform_keys):
    return build_config(
        api_url=API_URL,
        merchant_id=MERCHANT_ID,
        aes_key=AES_KEY,
        private_key=merchant_keys[0].decode(),
        platform_public_key=platform_keys[1].decode(),
        timeout=5,
    )


# ---------- fake HTTP ----------

class FakeResponse:
    def __init__(self, status_code: int = 200, content: bytes = b""):
        self.status_code = status_code
        self.content = content


class FakeSession:
    """Stands in for requests.Session: records posts, replays a canned reply."""

    def __init__(self, reply=None, exc=None):
        self.reply = reply or FakeResponse()
        self.exc = exc
        self.calls = []

    def post(self, url, data=None, headers=None, timeout=None):
        self.calls.append({"url": url, "data": data, "headers": headers, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.reply

    def close(self):
        pass


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def client(config, session):
    return Client(config, session=session)


# ---------- platform side helpers ----------

def platform_reply(platform_private_pem, plain: str = "", *, res_code="0000", res_msg="成功",
                   signed=True, fun_code="6003") -> bytes:
    """Envelope body the platform would send back for `plain`."""
    res_data = encrypt_aes(plain, AES_KEY) if plain else ""
    sign = ""
    if signed and res_data:
        sign = rsa_sign_sha1(load_private_key(platform_private_pem), res_data)
    msg = ResponseMessage(
        req_id="1767000000000001",
        fun_code=fun_code,
        mer_id=MERCHANT_ID,
        version="V1.0",
        res_data=res_data,
        res_code=res_code,
        res_msg=res_msg,
        sign=sign,
    )
    return msg.to_json()
