"""Provider 抽象接口。

上层调用方不直接依赖 HTTP 细节，而是依赖此协议，
便于在测试中替换为假实现。
"""

from typing import Protocol

from kindroid_core.domain.models import Conversation, KindroidAIResult


class InferenceClient(Protocol):
    """推理客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - invoke(...): 执行一次推理调用，返回成功或限流结果，其余失败抛异常。
    """

    name: str

    def invoke(
        self,
        share_code: str,
        conversation: Conversation,
        enable_filter: bool = False,
    ) -> KindroidAIResult:
        ...

    async def ainvoke(
        self,
        share_code: str,
        conversation: Conversation,
        enable_filter: bool = False,
    ) -> KindroidAIResult:
        """invoke 的异步版本，挂起调用方协程直到请求完成。"""

        ...
