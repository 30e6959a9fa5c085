"""统一业务异常模型。

所有跨模块抛出的业务级错误都应该继承自 BusinessError，
便于在会话层或 UI 层做统一捕获与用户提示。

Provider 调用失败统一抛出 ProviderError 的子类，kind 字段区分四种终止性错误：

- configuration: 密钥缺失或仍为占位值，调用前即被拦截。
- http_failure: 厂商返回非 2xx 状态码。
- malformed_response: 2xx 但响应 JSON 缺少预期字段。
- transport: DNS 失败、连接失败等网络层错误。

适配层不做任何重试，错误对本次 respond 调用都是终止性的。
"""

from typing import Literal, Optional


ProviderErrorKind = Literal["configuration", "http_failure", "malformed_response", "transport"]


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "API_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        extra: 其他补充字段（例如 provider）。
    """

    def __init__(self, code: str, message: str, http_status: int = 400, **extra):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.extra = extra
        super().__init__(message)


class ValidationError(BusinessError):
    """参数或调用方式校验失败（未知 Provider、会话忙等）。"""


class ProviderError(BusinessError):
    """Provider 调用失败的基类。"""

    kind: ProviderErrorKind

    def __init__(self, code: str, message: str, provider: Optional[str] = None, **extra):
        super().__init__(code=code, message=message, provider=provider, **extra)
        self.provider = provider


class ConfigurationError(ProviderError):
    """密钥缺失或为占位值。"""

    kind: ProviderErrorKind = "configuration"

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(code="MISSING_API_KEY", message=message, provider=provider)


class HttpFailure(ProviderError):
    """厂商返回非 2xx 状态码，status 为实际观察到的状态码。"""

    kind: ProviderErrorKind = "http_failure"

    def __init__(self, status: int, message: Optional[str] = None, provider: Optional[str] = None):
        super().__init__(
            code="API_ERROR",
            message=message or f"API request failed with status: {status}",
            provider=provider,
        )
        self.status = status
        self.http_status = status


class MalformedResponse(ProviderError):
    """响应为 2xx，但内容无法解析为预期结构。"""

    kind: ProviderErrorKind = "malformed_response"

    def __init__(self, message: str = "Invalid response format from AI service", provider: Optional[str] = None):
        super().__init__(code="INVALID_RESPONSE", message=message, provider=provider)


class TransportError(ProviderError):
    """网络层错误，例如 DNS 失败、连接被拒、超时等。"""

    kind: ProviderErrorKind = "transport"

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(code="NETWORK_ERROR", message=message, provider=provider)
