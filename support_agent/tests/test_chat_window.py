"""测试聊天窗口的发送流程（不创建真实窗口）。"""

import pytest

tk = pytest.importorskip("tkinter")

from support_agent.domain.exceptions import ValidationError  # noqa: E402
from support_agent.gui import chat_window  # noqa: E402


class FakeRoot:
    def __init__(self):
        self.callbacks = []

    def after(self, ms, callback):
        self.callbacks.append(callback)


class FakeWidget:
    def __init__(self, value=""):
        self.value = value
        self.options = {}
        self.lines = []

    def get(self):
        return self.value

    def delete(self, *a):
        self.lines = []

    def config(self, **kw):
        self.options.update(kw)

    def insert(self, index, text, tag=None):
        self.lines.append((text, tag))

    def see(self, index):
        pass


class SyncThread:
    def __init__(self, target, daemon=None):
        self.target = target

    def start(self):
        self.target()


def make_app(monkeypatch, error):
    def run_support_chat(text, provider):
        raise error

    monkeypatch.setattr(chat_window, "run_support_chat", run_support_chat)
    monkeypatch.setattr(chat_window, "get_conversation_messages", lambda: [])
    monkeypatch.setattr(chat_window.threading, "Thread", SyncThread)
    app = chat_window.App.__new__(chat_window.App)
    app.root = FakeRoot()
    app.entry = FakeWidget("my wifi is down")
    app.send_btn = FakeWidget()
    app.provider = FakeWidget("Gemini")
    app.chat = FakeWidget()
    app.sending = False
    return app


def drain(app):
    while app.root.callbacks:
        app.root.callbacks.pop(0)()


def test_business_error_in_worker_reenables_input(monkeypatch):
    app = make_app(monkeypatch, ValidationError(code="SESSION_BUSY", message="A reply is still pending."))
    app.on_send()
    assert app.sending
    drain(app)
    assert not app.sending
    assert app.entry.options["state"] == tk.NORMAL
    assert app.send_btn.options["text"] == "Send"
    assert ("[SESSION_BUSY] A reply is still pending.\n", "error") in app.chat.lines


def test_unexpected_error_in_worker_is_shown(monkeypatch):
    app = make_app(monkeypatch, RuntimeError("boom"))
    app.on_send()
    drain(app)
    assert not app.sending
    assert ("Error: boom\n", "error") in app.chat.lines
