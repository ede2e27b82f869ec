"""从单条 data 负载中提取文本增量。"""

import json
from dataclasses import dataclass
from typing import Any, Literal, Optional

DONE_SENTINEL = "[DONE]"


@dataclass(frozen=True)
class DeltaEvent:
    """Delta 提取结果。

    kind:
        - "sentinel": 收到 [DONE]，本轮流在逻辑上已经结束。
        - "fragment": 一段文本增量，text 原样保留（空串、空白都算）。
        - "empty": 合法 JSON 但不含 choices[0].delta.content，例如角色声明或 finish_reason 事件。
        - "parse_warning": 负载不是合法 JSON，error 为解析错误信息。
    """

    kind: Literal["sentinel", "fragment", "empty", "parse_warning"]
    text: Optional[str] = None
    error: Optional[str] = None


SENTINEL = DeltaEvent(kind="sentinel")
EMPTY = DeltaEvent(kind="empty")


def extract_delta(payload: str) -> DeltaEvent:
    if payload.strip() == DONE_SENTINEL:
        return SENTINEL
    try:
        data = json.loads(payload)
    except (json.JSONDecodeError, RecursionError) as e:
        # 嵌套过深的负载会触发 RecursionError，同样按解析失败处理
        return DeltaEvent(kind="parse_warning", error=str(e))
    content = _delta_content(data)
    if content is None:
        return EMPTY
    try:
        content.encode("utf-8")
    except UnicodeEncodeError as e:
        # json.loads 接受孤立的代理项转义（如 "\ud83d"），这种文本无法写到终端
        return DeltaEvent(kind="parse_warning", error=str(e))
    return DeltaEvent(kind="fragment", text=content)


def _delta_content(data: Any) -> Optional[str]:
    """按 choices[0].delta.content 取值，路径缺失或类型不符时返回 None。"""

    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None
