"""领域层模型与协议。

包含：
- models: ChatRequest / ChatResponse、RetryPolicy 以及单次远程尝试的结果类型。
- exceptions: 业务异常类型定义。
"""
