"""Kindroid Provider 集成层。

该包下的模块负责：
- 定义推理客户端抽象接口 (base)。
- 维护协议常量 (registry)。
- 生成 requester id (requester)。
- 提供具体实现 (kindroid_client)。
"""

from typing import Optional

from kindroid_core.config.settings import Settings, load_settings
from kindroid_core.providers.base import InferenceClient
from kindroid_core.providers.kindroid_client import KindroidClient


def create_client(cfg: Optional[Settings] = None) -> InferenceClient:
    """创建推理客户端；未传配置时现读一份环境配置。"""

    return KindroidClient(cfg if cfg is not None else load_settings())
