"""对外 API 服务模块。

提供函数式接口供上层应用（如聊天机器人）直接调用，
每次调用都会重新读取配置。
"""

from typing import Optional

from kindroid_core.config.settings import Settings
from kindroid_core.domain.models import Conversation, KindroidAIResult
from kindroid_core.providers import create_client


def call_kindroid_ai(
    shared_ai_code: str,
    conversation: Conversation,
    enable_filter: bool = False,
    cfg: Optional[Settings] = None,
) -> KindroidAIResult:
    """调用 Kindroid AI 推理端点。

    Args:
        shared_ai_code: 用于识别 AI 的 share code
        conversation: 对话消息列表（不能为空）
        enable_filter: 是否开启 NSFW 过滤
        cfg: 可选配置，默认从环境读取

    Returns:
        KindroidSuccess（含 reply）或 KindroidRateLimited

    Raises:
        ValidationError: 对话为空或配置缺失
        InferenceFailure: 其他调用失败
    """
    client = create_client(cfg)
    return client.invoke(shared_ai_code, conversation, enable_filter)


async def acall_kindroid_ai(
    shared_ai_code: str,
    conversation: Conversation,
    enable_filter: bool = False,
    cfg: Optional[Settings] = None,
) -> KindroidAIResult:
    """call_kindroid_ai 的异步版本。"""
    client = create_client(cfg)
    return await client.ainvoke(shared_ai_code, conversation, enable_filter)
