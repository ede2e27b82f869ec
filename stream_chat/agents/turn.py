"""单轮流式 turn。

一次 turn 依次驱动 Transport -> SseFrameParser -> extract_delta，
每拿到一段增量就立即写到 stdout，并按需累积完整文本。

状态机：starting -> streaming -> done（或 failed）。终态不可逆，
StreamingTurn 对象只能运行一次。
"""

import logging
from typing import Any, Dict, List, Optional

from stream_chat.domain.models import ChatRequest, TurnResult, TurnState
from stream_chat.infrastructure.console import Console
from stream_chat.infrastructure.logging.logger import logger
from stream_chat.providers.base import Transport
from stream_chat.streaming.delta import extract_delta
from stream_chat.streaming.sse import SseFrameParser


class StreamingTurn:
    def __init__(
        self,
        transport: Transport,
        endpoint: str,
        request: ChatRequest,
        *,
        capture: bool = False,
        title: str = "LLM Response",
        console: Optional[Console] = None,
    ):
        self._transport = transport
        self._endpoint = endpoint
        self._request = request
        self._capture = capture
        self._title = title
        self._console = console or Console()
        self.state: TurnState = "starting"

    def run(self) -> TurnResult:
        """驱动整个 turn 直到 done；传输错误会把状态置为 failed 并向上抛出。"""

        if self.state != "starting":
            raise RuntimeError(f"turn already ran (state={self.state})")

        log_ctx = {"phase": self._title, "endpoint": self._endpoint}
        self._console.section(self._title)
        self._log(logging.INFO, f"Sending request to {self._endpoint}", log_ctx, transport=self._transport.name)

        parser = SseFrameParser()
        pieces: Optional[List[str]] = [] if self._capture else None
        fragment_count = 0
        chunks = None
        try:
            chunks = self._transport.send(self._endpoint, self._request)
            for chunk in chunks:
                self.state = "streaming"
                for payload in parser.feed(chunk):
                    event = extract_delta(payload)
                    if event.kind == "sentinel":
                        self._console.done()
                        return self._finish(pieces, fragment_count, True, None, log_ctx)
                    if event.kind == "fragment":
                        self._console.fragment(event.text)
                        fragment_count += 1
                        if pieces is not None:
                            pieces.append(event.text)
                    elif event.kind == "parse_warning":
                        self._warn(f"Failed to parse JSON chunk: '{payload}', Error: {event.error}", log_ctx)
        except Exception as e:
            self.state = "failed"
            self._log(logging.ERROR, f"Turn failed: {e}", log_ctx, fragments=fragment_count)
            raise
        finally:
            close = getattr(chunks, "close", None)
            if close is not None:
                close()

        leftover = parser.finish()
        if leftover:
            anomaly = f"Stream ended unexpectedly. Remaining buffer: {leftover.decode('utf-8', errors='replace')!r}"
        else:
            anomaly = "Stream ended without a final [DONE] message."
        self._warn(anomaly, log_ctx)
        return self._finish(pieces, fragment_count, False, anomaly, log_ctx)

    def _finish(
        self,
        pieces: Optional[List[str]],
        fragment_count: int,
        saw_sentinel: bool,
        anomaly: Optional[str],
        log_ctx: Dict[str, Any],
    ) -> TurnResult:
        self.state = "done"
        captured = "".join(pieces) if pieces is not None else None
        self._log(
            logging.INFO,
            "Turn finished",
            log_ctx,
            fragments=fragment_count,
            saw_sentinel=saw_sentinel,
            captured_chars=len(captured) if captured is not None else None,
        )
        return TurnResult(
            captured=captured,
            state="done",
            saw_sentinel=saw_sentinel,
            fragment_count=fragment_count,
            anomaly=anomaly,
        )

    def _warn(self, message: str, log_ctx: Dict[str, Any]) -> None:
        self._console.warn(message)
        self._log(logging.WARNING, message, log_ctx)

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
