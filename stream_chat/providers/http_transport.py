"""基于 httpx 的流式 Transport。

本模块负责：

1. 把 ChatRequest 序列化为请求 JSON 并 POST 到配置的接口。
2. 在读取任何响应体之前检查状态码，非 2xx 时完整读取响应体并抛错。
3. 成功时按到达顺序逐块产出原始字节，不假设块边界与行或事件对齐。
4. 把 httpx 的网络异常统一包装为 NetworkError。
"""

from typing import Iterator

import httpx

from stream_chat.domain.exceptions import NetworkError, ServerRejectedError
from stream_chat.domain.models import ChatRequest


class HttpxTransport:
    """httpx 同步客户端实现。

    - name: 传输实现名称（供日志使用）。
    - send: 对外统一入口，返回字节块的惰性序列。
    """

    name = "httpx"

    def __init__(self, settings):
        # Settings 里包含超时等配置
        self._settings = settings

    def send(self, endpoint: str, request: ChatRequest) -> Iterator[bytes]:
        """执行一次流式请求，逐块 yield 原始字节。

        这是一个生成器：调用方停止迭代（或显式 close）时，
        响应与连接随 with 块一起释放。
        """

        payload = request.to_payload()
        timeout = httpx.Timeout(
            self._settings.http_timeout,
            connect=getattr(self._settings, "connect_timeout", None),
        )
        try:
            with httpx.Client(timeout=timeout, trust_env=False) as client:
                with client.stream(
                    "POST",
                    endpoint,
                    json=payload,
                    headers={
                        "Content-Type": "application/json",
                        "Accept": "text/event-stream",
                    },
                ) as resp:
                    if not 200 <= resp.status_code < 300:
                        raise ServerRejectedError(
                            resp.status_code,
                            _read_error_body(resp),
                            endpoint=endpoint,
                        )
                    for chunk in resp.iter_bytes():
                        if chunk:
                            yield chunk
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接被拒、读取超时、流中途断开等
            raise NetworkError(code="NETWORK_ERROR", message=str(e) or repr(e), endpoint=endpoint)


def _read_error_body(resp) -> str:
    """完整读取错误响应体用于诊断，读取失败时返回说明文字。"""

    try:
        resp.read()
        return resp.text
    except httpx.HTTPError as e:
        return f"Failed to read error body: {e}"
