"""把本地图片编码为 data URL。"""

import base64
from pathlib import Path
from typing import Dict

from stream_chat.domain.exceptions import ImageEncodingError


MIME_BY_EXTENSION: Dict[str, str] = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "webp": "image/webp",
    "gif": "image/gif",
}
DEFAULT_MIME_TYPE = "application/octet-stream"


def guess_mime_type(path: str) -> str:
    """按扩展名（不区分大小写）推断 MIME 类型，未知扩展名回落到通用二进制类型。"""

    suffix = Path(path).suffix.lstrip(".").lower()
    return MIME_BY_EXTENSION.get(suffix, DEFAULT_MIME_TYPE)


class DataUrlImageEncoder:
    """读取文件并返回 data:<mime>;base64,<payload>。"""

    def encode(self, path: str) -> str:
        try:
            raw = Path(path).read_bytes()
        except OSError as e:
            raise ImageEncodingError(
                code="IMAGE_READ_ERROR",
                message=f"Failed to read image {path}: {e}",
                path=path,
            )
        encoded = base64.b64encode(raw).decode("ascii")
        return f"data:{guess_mime_type(path)};base64,{encoded}"
