"""统一业务异常模型。

所有对外抛出的错误都继承自 BusinessError，调用方可以统一捕获。

注意：限流（HTTP 429）不是异常，而是 KindroidRateLimited 返回值，
见 domain.models。
"""

from typing import Optional


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "EMPTY_CONVERSATION"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 requester、provider 等）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class NetworkError(BusinessError):
    """网络层错误，例如连接失败、超时等。"""


class ApiError(BusinessError):
    """Kindroid 返回非 2xx/429 状态，或响应体无法解析时使用。"""


class RateLimitError(BusinessError):
    """Provider 限流错误。

    KindroidClient 不抛出它（429 走返回值），保留给需要把限流
    转成异常的调用方，例如 KindroidRateLimited.raise_for_limit()。
    """


class ValidationError(BusinessError):
    """参数或配置校验失败，发生在任何网络请求之前。"""


class InferenceFailure(BusinessError):
    """推理调用失败的统一对外信号。

    message 固定不变；具体原因（NetworkError / ApiError）只挂在
    cause 与 __cause__ 上并写入日志，不出现在 str(exc) 中。
    """

    MESSAGE = "Failed to get response from Kindroid AI"

    def __init__(self, cause: Optional[BusinessError] = None, **extra):
        super().__init__(
            code="INFERENCE_FAILED",
            message=self.MESSAGE,
            http_status=502,
            **extra,
        )
        self.cause = cause
