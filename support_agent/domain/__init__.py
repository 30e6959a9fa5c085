"""领域层模型与异常。

包含：
- models: Turn / Conversation / Exchange。
- exceptions: 业务异常与 Provider 错误分类。
"""
