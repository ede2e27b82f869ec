"""两阶段会话编排。

阶段 1 发送用户提示词（可附图片），仅在请求 review 时捕获回答全文；
阶段 2 把原始提示词与阶段 1 的回答嵌入 review 提示词再次发送，
并重新附上同一张图片。两个阶段严格串行，阶段 2 的内容依赖阶段 1 的结果。
"""

from dataclasses import dataclass
from typing import Optional

from stream_chat.agents.turn import StreamingTurn
from stream_chat.config.settings import settings
from stream_chat.domain.content import build_content
from stream_chat.domain.models import ChatRequest, TurnResult
from stream_chat.infrastructure.console import Console
from stream_chat.infrastructure.logging.logger import logger
from stream_chat.prompts import build_review_prompt
from stream_chat.providers.base import ImageEncoder, Transport

INITIAL_TITLE = "LLM Response"
REVIEW_TITLE = "Review Response"
REVIEW_SKIPPED_MESSAGE = "Review step requested, but failed to capture the initial response."


@dataclass(frozen=True)
class ConversationOptions:
    """一次 CLI 调用的已校验参数。

    - prompt: 用户提示词。
    - image_path: 可选图片路径。
    - review: 是否追加 review 轮次。
    - endpoint: 接口地址，缺省取配置。
    """

    prompt: str
    image_path: Optional[str] = None
    review: bool = False
    endpoint: Optional[str] = None


@dataclass
class ConversationOutcome:
    initial: TurnResult
    review: Optional[TurnResult] = None
    review_skipped: bool = False


class ChatConversation:
    """把初始 turn 与可选的 review turn 串起来。

    传输错误与图片编码错误直接向上抛出；review 因缺少捕获文本而跳过时
    只输出诊断，不视为失败。
    """

    def __init__(
        self,
        transport: Transport,
        image_encoder: ImageEncoder,
        console: Optional[Console] = None,
    ):
        self._transport = transport
        self._image_encoder = image_encoder
        self._console = console or Console()

    def run(self, options: ConversationOptions) -> ConversationOutcome:
        endpoint = options.endpoint or settings.endpoint

        image_url: Optional[str] = None
        if options.image_path:
            logger.info(f"Reading and encoding image: {options.image_path}")
            # 只编码一次，review 轮次复用同一个 data URL
            image_url = self._image_encoder.encode(options.image_path)

        logger.info("Building initial request content")
        initial_request = ChatRequest.from_content(build_content(options.prompt, image_url))
        initial = self._run_turn(endpoint, initial_request, capture=options.review, title=INITIAL_TITLE)
        if not options.review:
            return ConversationOutcome(initial=initial)

        if not initial.captured:
            self._console.warn(REVIEW_SKIPPED_MESSAGE)
            logger.warning(REVIEW_SKIPPED_MESSAGE, extra={"extra": {"phase": INITIAL_TITLE}})
            return ConversationOutcome(initial=initial, review_skipped=True)

        logger.info("Building review request content")
        review_prompt = build_review_prompt(options.prompt, initial.captured)
        review_request = ChatRequest.from_content(build_content(review_prompt, image_url))
        review = self._run_turn(endpoint, review_request, capture=False, title=REVIEW_TITLE)
        return ConversationOutcome(initial=initial, review=review)

    def _run_turn(self, endpoint: str, request: ChatRequest, *, capture: bool, title: str) -> TurnResult:
        turn = StreamingTurn(
            self._transport,
            endpoint,
            request,
            capture=capture,
            title=title,
            console=self._console,
        )
        return turn.run()
