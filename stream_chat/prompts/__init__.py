"""提示词模板。

目前只有 review 一种：把原始提示词与第一轮回答以引号包裹的形式
嵌入新的提示词，要求模型审阅并给出（可能修订后的）最终回答。
"""

REVIEW_TEMPLATE = (
    'Original prompt: "{prompt}"\n\n'
    'First response: "{first_response}"\n\n'
    "Please review the first response based on the original prompt "
    "(and image, if provided below). Provide a final, potentially revised response."
)


def build_review_prompt(prompt: str, first_response: str) -> str:
    """生成 review 轮次的提示词，两段文本均原样嵌入。"""

    # str.format 不会再解析替换进来的文本，花括号可以原样保留
    return REVIEW_TEMPLATE.format(prompt=prompt, first_response=first_response)
