"""Kindroid Provider 适配器。

本模块负责：

1. 校验对话非空，并由最后一条消息生成 requester id。
2. 构造请求体 {share_code, conversation, enable_filter} 与请求头。
3. 发送一次 HTTPS POST（不重试）。
4. 把响应映射为 KindroidSuccess / KindroidRateLimited；其余失败
   统一抛出 InferenceFailure，具体原因写日志并挂在 cause 上。
"""

from typing import Any, Dict

import httpx

from kindroid_core.domain.exceptions import (
    ApiError,
    BusinessError,
    InferenceFailure,
    NetworkError,
    ValidationError,
)
from kindroid_core.domain.models import (
    Conversation,
    InferenceRequest,
    KindroidAIResult,
    KindroidRateLimited,
    KindroidSuccess,
)
from kindroid_core.infrastructure.logging.logger import logger
from kindroid_core.providers.registry import (
    AUTHORIZATION_HEADER,
    CONTENT_TYPE_HEADER,
    JSON_CONTENT_TYPE,
    KINDROID_CONFIG,
)
from kindroid_core.providers.requester import requester_id_for


class KindroidClient:
    """Kindroid 推理客户端实现。

    - name: Provider 名称（供日志使用）。
    - invoke / ainvoke: 对外调用入口。
    """

    name = KINDROID_CONFIG.name

    def __init__(self, settings):
        # 构造时即校验，缺少 URL 或密钥时不会发出任何请求
        if not getattr(settings, "kindroid_infer_url", None):
            raise ValidationError(code="MISSING_CONFIG", message="KINDROID_INFER_URL not set")
        if not getattr(settings, "kindroid_api_key", None):
            raise ValidationError(code="MISSING_CONFIG", message="KINDROID_API_KEY not set")
        try:
            httpx.URL(settings.kindroid_infer_url)
        except httpx.InvalidURL as e:
            raise ValidationError(code="INVALID_CONFIG", message=f"KINDROID_INFER_URL is invalid: {e}")
        # 请求头只能是 ASCII
        if not settings.kindroid_api_key.isascii():
            raise ValidationError(code="INVALID_CONFIG", message="KINDROID_API_KEY must be ASCII")
        self._settings = settings

    def _client_options(self) -> Dict[str, Any]:
        # 与 axios 默认行为一致：跟随 307/308 等重定向
        return {
            "timeout": self._settings.http_timeout,
            "trust_env": False,
            "follow_redirects": True,
        }

    def invoke(
        self,
        share_code: str,
        conversation: Conversation,
        enable_filter: bool = False,
    ) -> KindroidAIResult:
        """执行一次同步推理调用。

        Raises:
            ValidationError: 对话为空（不发请求）。
            InferenceFailure: 网络错误、非 429 的错误状态或响应体不合法。
        """

        request, headers = self._prepare(share_code, conversation, enable_filter)
        try:
            try:
                with httpx.Client(**self._client_options()) as client:
                    resp = client.post(
                        self._settings.kindroid_infer_url,
                        json=request.to_payload(),
                        headers=headers,
                    )
            except httpx.RequestError as e:
                # 网络错误：DNS 失败、连接被拒、超时等
                raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__, http_status=503)
            return self._handle_response(resp)
        except (NetworkError, ApiError) as e:
            raise self._failure(e, headers) from e

    async def ainvoke(
        self,
        share_code: str,
        conversation: Conversation,
        enable_filter: bool = False,
    ) -> KindroidAIResult:
        """invoke 的异步版本。

        任务被取消时 asyncio.CancelledError 原样向上传播，不会被包装。
        """

        request, headers = self._prepare(share_code, conversation, enable_filter)
        try:
            try:
                async with httpx.AsyncClient(**self._client_options()) as client:
                    resp = await client.post(
                        self._settings.kindroid_infer_url,
                        json=request.to_payload(),
                        headers=headers,
                    )
            except httpx.RequestError as e:
                raise NetworkError(code="NETWORK_ERROR", message=str(e) or type(e).__name__, http_status=503)
            return self._handle_response(resp)
        except (NetworkError, ApiError) as e:
            raise self._failure(e, headers) from e

    def _prepare(
        self,
        share_code: str,
        conversation: Conversation,
        enable_filter: bool,
    ) -> tuple[InferenceRequest, Dict[str, str]]:
        requester_id = requester_id_for(conversation)
        request = InferenceRequest(
            share_code=share_code,
            conversation=conversation,
            enable_filter=enable_filter,
        )
        return request, self._build_headers(requester_id)

    def _build_headers(self, requester_id: str) -> Dict[str, str]:
        return {
            AUTHORIZATION_HEADER: f"Bearer {self._settings.kindroid_api_key}",
            KINDROID_CONFIG.requester_header: requester_id,
            CONTENT_TYPE_HEADER: JSON_CONTENT_TYPE,
        }

    def _handle_response(self, resp: Any) -> KindroidAIResult:
        """把 HTTP 响应映射为结果值；无法映射时抛 ApiError。"""

        if resp.status_code == KINDROID_CONFIG.rate_limit_status:
            # 限流不是错误，由调用方决定何时重试
            logger.warning("kindroid.rate_limited", extra={"extra": {"provider": self.name}})
            return KindroidRateLimited()
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code)
        try:
            data = resp.json()
        except ValueError:
            raise ApiError(
                code="MALFORMED_RESPONSE",
                message="Response body is not valid JSON",
                http_status=resp.status_code,
            )
        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise ApiError(
                code="MALFORMED_RESPONSE",
                message="Response body has no reply field",
                http_status=resp.status_code,
            )
        return KindroidSuccess(reply=reply)

    def _failure(self, cause: BusinessError, headers: Dict[str, str]) -> InferenceFailure:
        logger.error(
            f"Error calling Kindroid AI: {cause.message}",
            extra={"extra": {
                "provider": self.name,
                "code": cause.code,
                "http_status": cause.http_status,
                "requester": headers.get(KINDROID_CONFIG.requester_header),
            }},
        )
        return InferenceFailure(cause=cause)
