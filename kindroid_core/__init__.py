"""Kindroid Core 顶层包。

该包把一段对话转发给 Kindroid AI 推理端点，并把结果映射为
KindroidSuccess / KindroidRateLimited，其余失败抛出 InferenceFailure。
"""

from kindroid_core.api.service import acall_kindroid_ai, call_kindroid_ai
from kindroid_core.domain.exceptions import InferenceFailure, ValidationError
from kindroid_core.domain.models import (
    ConversationMessage,
    KindroidAIResult,
    KindroidRateLimited,
    KindroidSuccess,
)
from kindroid_core.providers.kindroid_client import KindroidClient

__all__ = [
    "call_kindroid_ai",
    "acall_kindroid_ai",
    "ConversationMessage",
    "KindroidAIResult",
    "KindroidSuccess",
    "KindroidRateLimited",
    "KindroidClient",
    "InferenceFailure",
    "ValidationError",
]
