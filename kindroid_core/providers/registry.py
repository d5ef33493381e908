"""Kindroid 端点相关常量。

端点 URL 与密钥来自配置（见 config.settings），这里只集中放置
协议层面固定不变的部分：请求头名称、requester id 规则等。"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderConfig:
    """某个推理 Provider 的协议配置。"""

    name: str
    requester_header: str
    requester_id_max_length: int
    rate_limit_status: int = 429


AUTHORIZATION_HEADER = "Authorization"
CONTENT_TYPE_HEADER = "Content-Type"
JSON_CONTENT_TYPE = "application/json"
REQUESTER_HEADER = "X-Kindroid-Requester"
REQUESTER_ID_MAX_LENGTH = 32


KINDROID_CONFIG = ProviderConfig(
    name="kindroid",
    requester_header=REQUESTER_HEADER,
    requester_id_max_length=REQUESTER_ID_MAX_LENGTH,
)
