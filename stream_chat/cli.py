"""命令行入口。

    stream-chat -p "Describe this image" -i photo.png --review
"""

import argparse
import logging
import sys
from typing import List, Optional

from stream_chat import __version__
from stream_chat.agents.conversation import ChatConversation, ConversationOptions
from stream_chat.config.settings import settings
from stream_chat.domain.exceptions import BusinessError
from stream_chat.infrastructure.console import Console
from stream_chat.infrastructure.logging.logger import enable_console_logging, logger
from stream_chat.providers import create_image_encoder, create_transport


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stream-chat",
        description="Stream a (optionally multimodal) chat completion from a local OpenAI-compatible server.",
    )
    parser.add_argument("-p", "--prompt", required=True, help="The prompt to send to the LLM")
    parser.add_argument("-i", "--image", default=None, help="Optional path to an image file for multimodal input")
    parser.add_argument(
        "--review",
        action="store_true",
        help="Whether to perform a review step after the initial response",
    )
    parser.add_argument(
        "--endpoint",
        default=None,
        help=f"Chat-completions endpoint (default: {settings.endpoint})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Also log progress to stderr")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        enable_console_logging(logging.INFO)

    console = Console()
    options = ConversationOptions(
        prompt=args.prompt,
        image_path=args.image,
        review=args.review,
        endpoint=args.endpoint,
    )
    conversation = ChatConversation(create_transport(), create_image_encoder(), console=console)
    try:
        conversation.run(options)
    except BusinessError as e:
        logger.error(f"Chat failed: {e.message}", extra={"extra": {"code": e.code, **e.extra}})
        console.error(e.message)
        return 1
    except KeyboardInterrupt:
        console.error("interrupted")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
