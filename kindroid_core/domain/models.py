"""对话与推理结果的数据模型。

本模块定义 Kindroid 适配层内部使用的标准数据结构：

- ConversationMessage: 对话记录中的一条发言。
- InferenceRequest: 发往 Kindroid 推理端点的请求体。
- KindroidSuccess / KindroidRateLimited: 一次调用的两种结果。

所有模型都是请求级的：调用时创建，请求结束即丢弃。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from kindroid_core.domain.exceptions import RateLimitError, ValidationError


@dataclass(frozen=True)
class ConversationMessage:
    """一条对话消息。

    - username: 发言者名称，最后一条消息的 username 用于生成 requester id。
    - text: 消息内容。
    - timestamp: 可选的时间戳（ISO 字符串），原样透传。
    - extra: 其他需要原样发给服务端的字段。
    """

    username: str
    text: str
    timestamp: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"username": self.username, "text": self.text}
        if self.timestamp is not None:
            payload["timestamp"] = self.timestamp
        payload.update(self.extra)
        return payload


# 调用方既可以传 ConversationMessage，也可以直接传已经是线上格式的 dict
MessageLike = Union[ConversationMessage, Mapping[str, Any]]
Conversation = Sequence[MessageLike]


def message_username(message: MessageLike) -> str:
    """读取一条消息的 username，兼容 dataclass 与 mapping 两种形式。"""

    if isinstance(message, ConversationMessage):
        return message.username
    if isinstance(message, Mapping) and "username" in message:
        return str(message["username"])
    raise ValidationError(
        code="MISSING_USERNAME",
        message="Last conversation message has no username",
    )


def message_to_payload(message: MessageLike) -> Any:
    if isinstance(message, ConversationMessage):
        return message.to_payload()
    # mapping 原样透传，不做逐条改写
    return message


@dataclass(frozen=True)
class InferenceRequest:
    """一次推理请求。"""

    share_code: str
    conversation: Conversation
    enable_filter: bool = False

    def to_payload(self) -> Dict[str, Any]:
        messages: List[Any] = [message_to_payload(m) for m in self.conversation]
        return {
            "share_code": self.share_code,
            "conversation": messages,
            "enable_filter": self.enable_filter,
        }


@dataclass(frozen=True)
class KindroidSuccess:
    """推理成功，reply 为 AI 回复文本。"""

    reply: str
    success: bool = field(default=True, init=False)
    rate_limited: bool = field(default=False, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": True, "reply": self.reply}


@dataclass(frozen=True)
class KindroidRateLimited:
    """服务端返回 429，调用方应稍后重试。"""

    success: bool = field(default=False, init=False)
    rate_limited: bool = field(default=True, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"success": False, "rateLimited": True}

    def raise_for_limit(self) -> None:
        """给更习惯异常流程的调用方使用。"""

        raise RateLimitError(code="RATE_LIMIT", message="Kindroid rate limit", http_status=429)


KindroidAIResult = Union[KindroidSuccess, KindroidRateLimited]
