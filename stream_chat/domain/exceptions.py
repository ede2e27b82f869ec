"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在 CLI 层做统一捕获与用户提示。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "SERVER_REJECTED"）。
        message: 用户可读错误信息。
        extra: 其他补充字段（例如 endpoint、path 等）。
    """

    def __init__(self, code: str, message: str, **extra):
        self.code = code
        self.message = message
        self.extra = extra
        super().__init__(message)


class TransportError(BusinessError):
    """传输层错误基类：一次 turn 因此直接进入 failed 状态。"""


class ServerRejectedError(TransportError):
    """服务端返回非 2xx 状态码时抛出，body 为完整读取的响应文本。"""

    def __init__(self, status: int, body: str, **extra):
        self.status = status
        self.body = body
        super().__init__(
            code="SERVER_REJECTED",
            message=f"Server returned error {status}: {body}",
            **extra,
        )


class NetworkError(TransportError):
    """网络层错误，例如连接失败、读取超时、流中断等。"""


class ImageEncodingError(BusinessError):
    """图片无法读取或编码，发生在任何网络请求之前。"""
