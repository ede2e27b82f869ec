"""消息内容组装。"""

from typing import List, Optional

from stream_chat.domain.models import ContentPart, ImageUrlPart, TextPart


def build_content(prompt: str, image_url: Optional[str] = None) -> List[ContentPart]:
    """由提示词和（已编码的）图片 URL 组装内容片段。

    总是输出恰好一个 TextPart；提供图片时再追加一个 ImageUrlPart。
    不做校验，也不会失败，图片的读取与编码由 ImageEncoder 负责。
    """

    parts: List[ContentPart] = [TextPart(text=prompt)]
    if image_url is not None:
        parts.append(ImageUrlPart(url=image_url))
    return parts
