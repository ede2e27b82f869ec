"""领域层模型与协议。

包含：
- models: ContentPart / ChatMessage / ChatRequest / TurnResult 等数据结构。
- content: 由提示词与图片组装消息内容。
- exceptions: 业务异常类型定义。
"""
