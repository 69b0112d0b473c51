"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError。
Responder 层负责把它们转换成回复文本，因此这些异常不会以 HTTP 错误的形式
到达调用方。
"""


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "MISSING_API_KEY"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 attempts、provider 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ConfigurationError(BusinessError):
    """配置缺失或无效，例如未设置 API key。"""


class RequestError(BusinessError):
    """远程调用最终失败（不可重试错误，或重试次数耗尽）。"""
