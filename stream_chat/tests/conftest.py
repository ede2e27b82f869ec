import io

import pytest

from stream_chat.infrastructure.console import Console


def sse(*contents, done=True):
    """把若干文本增量拼成一段 SSE 字节流。"""

    frames = []
    for text in contents:
        escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
        frames.append(f'data: {{"choices":[{{"delta":{{"content":"{escaped}"}}}}]}}\n\n')
    if done:
        frames.append("data: [DONE]\n\n")
    return "".join(frames).encode("utf-8")


class FakeTransport:
    """按顺序回放预设响应的 Transport 替身。

    responses 中每一项对应一次 send 调用：字节块列表，或要抛出的异常。
    """

    name = "fake"

    def __init__(self, *responses):
        self._responses = list(responses)
        self.requests = []

    def send(self, endpoint, request):
        self.requests.append((endpoint, request))
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        for chunk in response:
            yield chunk


class FakeImageEncoder:
    def __init__(self, url="data:image/png;base64,AAAA", error=None):
        self.url = url
        self.error = error
        self.calls = []

    def encode(self, path):
        self.calls.append(path)
        if self.error:
            raise self.error
        return self.url


@pytest.fixture
def console():
    return Console(out=io.StringIO(), err=io.StringIO(), done_marker="[stream closed]")
