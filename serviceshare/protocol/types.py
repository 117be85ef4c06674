# serviceshare/protocol/types.py
from __future__ import annotations

# ---- Protocol defaults ----
DEFAULT_VERSION = "V1.0"
DEFAULT_TIMEOUT = 60.0        # seconds
DEFAULT_API_URL = "http://testgateway.serviceshare.com/testapi/clientapi/clientBusiness/common"

# ---- Response codes ----
RES_CODE_SUCCESS = "0000"
RES_CODE_FAILED = "9999"      # used in our acknowledgement of platform notifications

# ---- HTTP headers ----
REQUEST_HEADERS = {
    "Content-Type": "application/json;charset=utf-8",
    "Accept": "application/json",
}

# ---- Envelope field names ----
F_REQ_ID = "reqId"
F_FUN_CODE = "funCode"
F_MER_ID = "merId"
F_VERSION = "version"
F_REQ_DATA = "reqData"
F_RES_DATA = "resData"
F_RES_CODE = "resCode"
F_RES_MSG = "resMsg"
F_SIGN = "sign"

# Minimal shape docs (for human readers)
# Request:  { "reqId", "funCode", "merId", "version", "reqData": <b64 AES-ECB>, "sign": <b64 RSA-SHA1 of reqData> }
# Response: { "reqId", "funCode", "merId", "version", "resData", "resCode", "resMsg", "sign": <of resData> }
# Notification: request shape, signed by the platform
