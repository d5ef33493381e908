"""X-Kindroid-Requester 请求头取值的生成。

规则（顺序不可调换，服务端依赖逐字节一致）：

1. 取最后一条消息的 username；
2. 按 JavaScript encodeURIComponent 的规则做百分号编码（UTF-8）；
3. 对编码结果做 base64；
4. 去掉所有非 ASCII 字母数字的字符；
5. 截断到 32 个字符。
"""

import base64
import re
from urllib.parse import quote

from kindroid_core.domain.models import Conversation, message_username
from kindroid_core.domain.exceptions import ValidationError
from kindroid_core.providers.registry import KINDROID_CONFIG

# encodeURIComponent 不转义的字符（字母数字之外）
_URI_COMPONENT_SAFE = "-_.!~*'()"
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")


def encode_uri_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def hash_requester_id(username: str) -> str:
    """把 username 转成 requester id，结果只含字母数字且长度 <= 32。"""

    encoded = encode_uri_component(username)
    b64 = base64.b64encode(encoded.encode("ascii")).decode("ascii")
    return _NON_ALNUM.sub("", b64)[:KINDROID_CONFIG.requester_id_max_length]


def requester_id_for(conversation: Conversation) -> str:
    if not conversation:
        raise ValidationError(code="EMPTY_CONVERSATION", message="Conversation array cannot be empty")
    return hash_requester_id(message_username(conversation[-1]))
