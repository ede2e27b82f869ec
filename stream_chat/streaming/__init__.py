"""SSE 流解析：字节块 -> 事件帧 -> data 负载 -> 文本增量。"""

from stream_chat.streaming.delta import DeltaEvent, extract_delta
from stream_chat.streaming.sse import SseFrameParser

__all__ = ["DeltaEvent", "SseFrameParser", "extract_delta"]
