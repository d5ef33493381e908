"""领域层模型与异常。

包含：
- models: ConversationMessage / InferenceRequest / 推理结果类型。
- exceptions: 业务异常类型定义。
"""
