"""两个适配器共用的 HTTP 调用与响应归一化工具。

- post_json: 发送一次 POST，把网络错误映射为 TransportError，
  非 2xx 映射为 HttpFailure（不会尝试解析响应体），返回解析后的 JSON。
- decode_response: 用 schemas 中的模型严格解析 JSON，失败映射为 MalformedResponse。
"""

from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as SchemaError

from support_agent.domain.exceptions import HttpFailure, MalformedResponse, TransportError
from support_agent.infrastructure.logging.logger import logger

ResponseModel = TypeVar("ResponseModel", bound=BaseModel)


def post_json(
    provider: str,
    url: str,
    payload: Dict[str, Any],
    headers: Mapping[str, str],
    params: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    client_kwargs: Dict[str, Any] = {"trust_env": False}
    if timeout:
        client_kwargs["timeout"] = timeout
    try:
        with httpx.Client(**client_kwargs) as client:
            resp = client.post(url, json=payload, headers=dict(headers), params=params)
    except (httpx.RequestError, httpx.InvalidURL, UnicodeEncodeError) as e:
        # DNS 失败、连接被拒、超时；以及 URL 非法、密钥含非 ASCII 字符导致请求无法构造
        logger.error(f"{provider} request failed: {e}", extra={"extra": {"provider": provider}})
        raise TransportError(message=str(e), provider=provider) from e

    if not 200 <= resp.status_code < 300:
        logger.warning(
            f"{provider} returned status {resp.status_code}",
            extra={"extra": {"provider": provider, "status": resp.status_code}},
        )
        raise HttpFailure(status=resp.status_code, provider=provider)

    try:
        return resp.json()
    except ValueError as e:
        logger.warning(f"{provider} returned a non-JSON body", extra={"extra": {"provider": provider}})
        raise MalformedResponse(provider=provider) from e


def decode_response(provider: str, data: Any, model: Type[ResponseModel]) -> ResponseModel:
    """按 schema 严格解析响应，任何缺失字段都视为 MalformedResponse。"""

    try:
        return model.model_validate(data)
    except SchemaError as e:
        logger.error(
            f"Unexpected {provider} response structure",
            extra={"extra": {"provider": provider, "errors": e.error_count()}},
        )
        raise MalformedResponse(provider=provider) from e
