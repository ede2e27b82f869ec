"""统一的请求与结果数据模型。

本模块定义了在 Transport、解析器与编排器之间共享的标准数据结构：

- ContentPart: 消息内容片段，TextPart 或 ImageUrlPart 二选一。
- ChatMessage: 一条 user 消息，由有序的 ContentPart 组成。
- ChatRequest: 发给 chat-completions 接口的完整请求，构造后不可变。
- TurnResult: 一次 turn（初始回答或 review）结束后的结果。

Transport 实现只依赖这些模型，并负责把 ChatRequest 转成请求 JSON。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple, Union


# 本系统只构造 user 消息
Role = Literal["user"]

# 单次 turn 的状态机：starting -> streaming -> done / failed
TurnState = Literal["starting", "streaming", "done", "failed"]


@dataclass(frozen=True)
class TextPart:
    """文本内容片段，text 原样发送，不做任何校验。"""

    text: str
    type: Literal["text"] = field(default="text", init=False)

    def to_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ImageUrlPart:
    """图片引用片段，url 可以是 data URL，也可以是远程 URL。"""

    url: str
    type: Literal["image_url"] = field(default="image_url", init=False)

    def to_payload(self) -> Dict[str, Any]:
        return {"type": self.type, "image_url": {"url": self.url}}


ContentPart = Union[TextPart, ImageUrlPart]


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息。

    - role: 固定为 "user"。
    - content: 有序的内容片段，按约定文本在前、图片在后。
    """

    content: Tuple[ContentPart, ...]
    role: Role = "user"

    def to_payload(self) -> Dict[str, Any]:
        return {
            "role": self.role,
            "content": [part.to_payload() for part in self.content],
        }


@dataclass(frozen=True)
class ChatRequest:
    """一次完整的聊天请求，每个 turn 重新构造。"""

    messages: Tuple[ChatMessage, ...]
    stream: bool = True

    @classmethod
    def from_content(cls, parts: List[ContentPart], stream: bool = True) -> "ChatRequest":
        """用一组内容片段构造只含一条 user 消息的请求。"""

        return cls(messages=(ChatMessage(content=tuple(parts)),), stream=stream)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "stream": self.stream,
            "messages": [m.to_payload() for m in self.messages],
        }


@dataclass
class TurnResult:
    """一次 turn 的最终结果。

    - captured: 开启捕获时为所有增量拼接后的文本，否则为 None。
    - state: 终态，done 或 failed。
    - saw_sentinel: 是否收到了 [DONE]。
    - fragment_count: 写到 stdout 的增量条数。
    - anomaly: 流未正常结束时的诊断信息（非致命）。
    """

    captured: Optional[str]
    state: TurnState = "done"
    saw_sentinel: bool = False
    fragment_count: int = 0
    anomaly: Optional[str] = None
