'''
    Description:
        - Exception taxonomy for the ServiceShare envelope client.
        - One class per failure phase. ConfigError and InvalidKeyError
          are raised at startup; APIError carries the platform's own
          code and message.
        - Also carries the catalogue of documented business codes returned
          in `resCode`.
'''

from __future__ import annotations
from typing import Dict, Optional


# ========== SDK errors ==========

class ServiceShareError(Exception):
    """Base class for everything raised by this package."""


class ConfigError(ServiceShareError):
    """invalid configuration"""


class InvalidKeyError(ServiceShareError):
    """invalid key format"""


class EncryptionError(ServiceShareError):
    """encryption failed"""


class DecryptionError(ServiceShareError):
    """decryption failed"""


class SignatureError(ServiceShareError):
    """signature generation failed"""


class VerificationError(ServiceShareError):
    """signature verification failed"""


class MissingSignatureError(VerificationError):
    """an envelope that must be signed arrived without `sign`"""


class RequestError(ServiceShareError):
    """request failed (transport error, timeout or non-200 status)"""


class InvalidResponseError(ServiceShareError):
    """invalid response (envelope could not be parsed)"""


# ========== API business errors ==========

class APIError(ServiceShareError):
    """
    A (code, message) pair from a call that was transported fine but
    rejected by the platform. Two APIErrors compare equal when their codes
    match, so `err == ERR_API_INSUFFICIENT_BALANCE` works whatever message
    the platform sent.
    """

    def __init__(self, code: str, message: str = ""):
        super().__init__(f"API Error [{code}]: {message}")
        self.code = code
        self.message = message

    def __eq__(self, other) -> bool:
        if not isinstance(other, APIError):
            return NotImplemented
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    def __repr__(self) -> str:
        return f"APIError(code={self.code!r}, message={self.message!r})"


_CATALOGUE: Dict[str, APIError] = {}


def _api(code: str, message: str) -> APIError:
    err = APIError(code, message)
    _CATALOGUE[code] = err
    return err


def lookup_api_error(code: str) -> Optional[APIError]:
    """Return the documented error for `code`, or None if it is not catalogued."""
    return _CATALOGUE.get(code)


ERR_API_SUCCESS                         = _api("0000", "当前请求处理成功")
ERR_API_UNKNOWN                         = _api("6000", "当前请求处理未明，请核实")
ERR_API_PARAM_ERROR                     = _api("6001", "参数错误")
ERR_API_INVALID_AMOUNT                  = _api("6002", "无效交易金额")
ERR_API_CUSTOMER_NOT_FOUND              = _api("6003", "客户信息不存在")
ERR_API_CUSTOMER_STATUS_NOT_OPEN        = _api("6004", "客户状态未开通")
ERR_API_CUSTOMER_KEY_EMPTY              = _api("6005", "客户秘钥为空")
ERR_API_SIGN_VERIFY_FAILED              = _api("6006", "请求数据验签失败")
ERR_API_DECRYPT_FAILED                  = _api("6007", "请求数据解密失败")
ERR_API_MERCHANT_BLACKLISTED            = _api("6008", "商户在黑名单不允许交易")
ERR_API_NO_RISK_CONTROL_INFO            = _api("6009", "无客户风控信息")
ERR_API_ACCOUNT_INVALID                 = _api("6010", "无客户账户信息或账户状态无效")
ERR_API_IP_NOT_WHITELISTED              = _api("6011", "客户请求地址未配置白名单")
ERR_API_BATCH_NO_DUPLICATE              = _api("6012", "客户批次号重复,请确认批次信息")
ERR_API_AMOUNT_LIMIT_EXCEEDED           = _api("6013", "付款金额超限")
ERR_API_SAVE_FAILED                     = _api("6014", "信息入库失败")
ERR_API_FEE_CALCULATION_ERROR           = _api("6015", "计算客户手续费出错或客户手续费率不存在")
ERR_API_ALREADY_SIGNED                  = _api("6016", "该用户信息已经做过签约")
ERR_API_PAYMENT_METHOD_NOT_CONFIGURED   = _api("6017", "客户付款方式未配置")
ERR_API_PERMISSION_DENIED               = _api("6018", "客户未开通该权限")
ERR_API_INSUFFICIENT_BALANCE            = _api("6019", "商户余额不足")
ERR_API_ORDER_NOT_FOUND                 = _api("6020", "未查询到订单")
ERR_API_NOT_SIGNED_WITH_SERVICE_COMPANY = _api("6021", "客户未签约此落地服务公司")
ERR_API_SIGN_AUTH_FAILED                = _api("6022", "签约信息鉴权失败")
ERR_API_BILL_FILE_NOT_FOUND             = _api("6023", "对账文件不存在")
ERR_API_NAME_EMPTY                      = _api("6024", "姓名不能为空")
ERR_API_ID_CARD_EMPTY                   = _api("6025", "身份证号不能为空")
ERR_API_SERVICE_ID_EMPTY                = _api("6026", "服务商 Id 不能为空")
ERR_API_NOT_SIGNED_WITH_PROVIDER_USER   = _api("6027", "用户未在该服务商签约")
ERR_API_PLATFORM_PROVIDER_NOT_FOUND     = _api("6028", "未查询到对应的平台服务商")
ERR_API_PLATFORM_PROVIDER_UNAVAILABLE   = _api("6029", "该平台服务商不可用")
ERR_API_CUSTOMER_ID_EMPTY               = _api("6030", "客户id不能为空")
ERR_API_BATCH_NO_EMPTY                  = _api("6031", "客户批次号不能为空")
ERR_API_BATCH_NO_NOT_FOUND              = _api("6032", "该客户批次号不存在")
ERR_API_ORDER_NO_NOT_FOUND              = _api("6033", "客户订单号或者订单流水号不存在")
ERR_API_TOTAL_COUNT_MISMATCH            = _api("6034", "付款总笔数和明细不一致")
ERR_API_TOTAL_AMOUNT_MISMATCH           = _api("6035", "付款总金额和明细不一致")
ERR_API_MULTI_SERVICE_PROVIDERS         = _api("6036", "批量付款只能选择一个服务商")
ERR_API_SIGNING_IN_PROGRESS             = _api("6037", "该用户签约中")
ERR_API_API_SIGNING_NOT_SUPPORTED       = _api("6038", "该客户不支持API接口签约")
ERR_API_ID_CARD_IMAGES_REQUIRED         = _api("6039", "服务商需要上传身份证正反面图片")
ERR_API_TASK_CODE_REQUIRED              = _api("6040", "服务商需要上传任务编码")
ERR_API_TASK_NOT_FOUND                  = _api("6041", "不存在该任务")
ERR_API_REQUEST_TOO_FREQUENT            = _api("6042", "请求频繁请稍后再试")
ERR_API_THREE_ELEMENT_AUTH_FAILED       = _api("6043", "三要素认证失败")
ERR_API_NOT_SIGNED_WITH_PROVIDER        = _api("6044", "该客户未签约此服务商")
ERR_API_INVOICE_CATEGORY_NOT_FOUND      = _api("6045", "未查询到可开票类目信息")
ERR_API_INVOICE_INFO_NOT_FOUND          = _api("6046", "未查询到该客户在该服务商开票信息")
ERR_API_RISK_AUDIT_REQUIRED             = _api("6047", "该客户订单需要待风控审核后才能下发")
ERR_API_RISK_AUDIT_FAILED               = _api("6048", "风控审核未通过")
ERR_API_RECORD_NOT_FOUND                = _api("6049", "未查询到符合条件的记录")
ERR_API_TASK_STATUS_ERROR               = _api("6050", "任务状态有误")
ERR_API_ORDER_NO_DUPLICATE              = _api("6051", "客户订单号重复,请确认订单信息")
ERR_API_API_NOT_SUPPORTED               = _api("6052", "该客户不支持 API 接口")
ERR_API_FEE_RATE_NOT_CONFIGURED         = _api("6053", "该客户费率未配置")
ERR_API_RECHARGE_ORDER_NO_DUPLICATE     = _api("6054", "充值订单号重复，请确认充值信息")
ERR_API_RECHARGE_AMOUNT_NOT_FOUND       = _api("6055", "未查询到可充值金额")
ERR_API_RECHARGE_ACCOUNT_MISMATCH       = _api("6056", "充值账号与平台不一致")
ERR_API_RECHARGE_AMOUNT_EXCEEDED        = _api("6057", "充值金额大于可充值金额")
ERR_API_MULTI_PAYMENT_METHODS           = _api("6058", "批量付款只能选择一种代付方式")
ERR_API_MANAGEMENT_FEE_MODE_MISMATCH    = _api("6059", "客户管理费扣费方式与服务商不一致")
ERR_API_MANAGEMENT_FEE_RATE_MISMATCH    = _api("6060", "客户管理费费率方式与服务商不一致")
ERR_API_SIGN_CONFIG_NOT_FOUND           = _api("6062", "未查询到签约要素配置")
ERR_API_PROVIDER_CONFIG_INCOMPLETE      = _api("6063", "服务商配置未完成，请联系运营")
ERR_API_ENTERPRISE_API_NOT_SUPPORTED    = _api("6064", "该企业不支持API,请联系运营")
ERR_API_CHANNEL_NOT_SUPPORTED           = _api("6065", "暂不支持该通道余额查询和分账")
ERR_API_MERCHANT_PUBLIC_KEY_ERROR       = _api("6067", "商户公钥格式错误")
ERR_API_ONE_CLICK_PAYMENT_NOT_ENABLED   = _api("6093", "未开通一键下发功能，请联系运营")
ERR_API_MANUAL_CONFIRM_REQUIRED         = _api("6100", "个人需手动确认收款，请在app或小程序发起")
ERR_API_VERIFY_SIGN_OR_TASK_FAILED      = _api("6101", "校验签约，任务领取单等信息失败")
ERR_API_REQUEST_TIMEOUT                 = _api("6102", "请求超时，请重试")
ERR_API_ORDER_CANNOT_BE_CANCELLED       = _api("6103", "非待确认订单不可撤销")
ERR_API_SETTLE_TIME_ERROR               = _api("6104", "当前时间不可结算,请稍后重试")
ERR_API_SIGN_TIME_ERROR                 = _api("6105", "当前时间不可签约,请稍后重试")
ERR_API_NO_ELECTRONIC_RECEIPT           = _api("6220", "暂无电子回单")
