"""SSE 帧解析器。

网络层交付的字节块边界没有任何语义，既可能把一帧切成两半，
也可能把帧分隔符 "\\n\\n" 本身切开。解析器把字节累积在缓冲区中，
每次追加后反复查找分隔符，取出完整的帧；没有分隔符的尾部字节
保留到下一个字节块。
"""

from typing import Iterator, List, Optional

# 空行：一个换行紧跟另一个换行
FRAME_DELIMITER = b"\n\n"
COMMENT_PREFIX = b":"
DATA_PREFIX = "data: "


class SseFrameParser:
    """把任意切分的字节块还原成 SSE 帧，并取出其中的 data 负载。

    每个 turn 持有一个独立的实例；每次 feed 之后缓冲区里最多
    只剩一个未结束的尾帧。
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    @property
    def pending(self) -> bytes:
        """尚未组成完整帧的字节。"""

        return bytes(self._buffer)

    def feed(self, chunk: bytes) -> List[str]:
        """追加一个字节块，返回本次新凑齐的所有帧中的 data 负载（按到达顺序）。"""

        self._buffer.extend(chunk)
        payloads: List[str] = []
        for frame in self._drain_frames():
            if _is_blank_or_comment(frame):
                continue
            payloads.extend(_data_payloads(frame))
        return payloads

    def finish(self) -> Optional[bytes]:
        """流结束时调用，返回残留的未结束字节（没有则为 None）并清空缓冲区。"""

        leftover = bytes(self._buffer)
        self._buffer.clear()
        return leftover or None

    def _drain_frames(self) -> Iterator[bytes]:
        start = 0
        while True:
            pos = self._buffer.find(FRAME_DELIMITER, start)
            if pos < 0:
                break
            end = pos + len(FRAME_DELIMITER)
            yield bytes(self._buffer[start:end])
            start = end
        if start:
            del self._buffer[:start]


def _is_blank_or_comment(frame: bytes) -> bool:
    return not frame or frame == FRAME_DELIMITER or frame.startswith(COMMENT_PREFIX)


def _data_payloads(frame: bytes) -> List[str]:
    text = frame.decode("utf-8", errors="replace")
    payloads: List[str] = []
    # 只按 "\n" 切分：str.splitlines 还会在 U+2028 等字符处断行，会切坏 JSON
    for line in text.split("\n"):
        if line.endswith("\r"):
            line = line[:-1]
        if line.startswith(DATA_PREFIX):
            payloads.append(line[len(DATA_PREFIX):])
    return payloads
