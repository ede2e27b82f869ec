"""Stream Chat 顶层包。

向本地 OpenAI 兼容的 chat-completions 接口发送（可带图片的）提示词，
并把 SSE 流式回答逐段写到终端；可选地再发起一轮 review，
让模型审阅并修订第一轮的回答。
"""

from stream_chat.agents.conversation import ChatConversation, ConversationOptions

__version__ = "0.1.0"

__all__ = ["ChatConversation", "ConversationOptions", "__version__"]
