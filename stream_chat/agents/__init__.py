"""对话编排：单轮流式 turn 与两阶段（初始 + review）会话。"""
