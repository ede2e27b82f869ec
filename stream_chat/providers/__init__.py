"""Transport 与 ImageEncoder 集成层。

该包下的模块负责：
- 定义能力抽象接口 (base)。
- 提供 httpx 流式传输实现 (http_transport)。
- 提供 data URL 图片编码实现 (image_encoder)。
"""

from stream_chat.config.settings import settings
from stream_chat.providers.base import ImageEncoder, Transport
from stream_chat.providers.http_transport import HttpxTransport
from stream_chat.providers.image_encoder import DataUrlImageEncoder


def create_transport() -> Transport:
    """根据当前配置创建默认的 Transport 实例。"""

    return HttpxTransport(settings)


def create_image_encoder() -> ImageEncoder:
    return DataUrlImageEncoder()


__all__ = [
    "DataUrlImageEncoder",
    "HttpxTransport",
    "ImageEncoder",
    "Transport",
    "create_image_encoder",
    "create_transport",
]
