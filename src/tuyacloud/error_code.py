"""
Static catalog of platform error codes.
"""

ERROR_MESSAGES: dict[int, str] = {
    500: "system error, please contact the administrator",
    1000: "data not valid",
    1001: "secret invalid",
    1002: "access_token is null",
    1003: "grant type invalid",
    1004: "sign invalid",
    1005: "clientId invalid",
    1006: "not support content type",
    1007: "not support the key",
    1008: "token expired",
    1009: "invalid uid",
    1010: "token is expired",
    1011: "token invalid",
    1012: "token status is invalid",
    1013: "request time is invalid",
    1100: "access token invalid or expired",
    1101: "param is illegal, please check it",
    1104: "type is incorrect",
    1105: "token is empty",
    1106: "permission deny",
    1107: "uri path invalid",
    1108: "uri path invalid",
    1109: "param is illegal, please check it",
    1110: "concurrent request over limit",
    1111: "the number of requests exceeds the limit",
    2001: "device is offline",
    2002: "this user does not have any devices",
    2006: "the device does not exist",
    2008: "command or value not support",
    2009: "not support this device",
}

UNKNOWN_ERROR = "unknown error"


def get_error(code) -> str:
    try:
        return ERROR_MESSAGES.get(int(code), UNKNOWN_ERROR)
    except (TypeError, ValueError):
        return UNKNOWN_ERROR
