"""Transport / ImageEncoder 抽象接口。

编排器不直接依赖 httpx 或文件系统，而是依赖这两个协议：

- Transport: 发送一次流式请求，产出原始字节块。
- ImageEncoder: 把图片文件编码成 data URL。

测试时可以替换成返回固定字节块的替身，而无需改动编排器。
"""

from typing import Iterable, Protocol

from stream_chat.domain.models import ChatRequest


class Transport(Protocol):
    """流式 HTTP 传输协议。

    实现者需要提供：
    - name: 传输实现名称，用于日志。
    - send(endpoint, request): 按网络到达顺序产出字节块；
      非 2xx 状态在产出任何字节块之前抛出 ServerRejectedError，
      网络故障（无论发生在开始前还是流中途）抛出 NetworkError。
    """

    name: str

    def send(self, endpoint: str, request: ChatRequest) -> Iterable[bytes]:
        ...


class ImageEncoder(Protocol):
    """图片编码协议，失败时抛出 ImageEncodingError。"""

    def encode(self, path: str) -> str:
        ...
