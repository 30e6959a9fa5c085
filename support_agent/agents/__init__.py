"""会话层：ChatSession 维护技术支持对话并分发到具体 Provider。"""
