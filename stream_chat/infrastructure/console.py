"""终端输出。

stdout 只承载回答正文（外加每轮的标题与结束标记），
诊断信息一律写到 stderr，两者从不混用。
"""

import sys
from typing import Optional, TextIO

from stream_chat.config.settings import settings


class Console:
    """封装 stdout / stderr 的写入，每次写入后立即 flush。

    未显式传入流时，在写入时才取 sys.stdout / sys.stderr，
    这样被替换过的流（例如测试中的捕获）也能生效。
    """

    def __init__(
        self,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
        done_marker: Optional[str] = None,
    ):
        self._out = out
        self._err = err
        self._done_marker = done_marker if done_marker is not None else settings.done_marker

    @property
    def out(self) -> TextIO:
        return self._out or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._err or sys.stderr

    def section(self, title: str) -> None:
        self._write(self.out, f"\n--- {title} ---\n")

    def fragment(self, text: str) -> None:
        self._write(self.out, text)

    def done(self) -> None:
        self._write(self.out, f"\n{self._done_marker}\n")

    def warn(self, message: str) -> None:
        self._write(self.err, f"\n[Warning: {message}]\n")

    def error(self, message: str) -> None:
        self._write(self.err, f"Error: {message}\n")

    @staticmethod
    def _write(stream: TextIO, text: str) -> None:
        stream.write(text)
        stream.flush()
