import threading
import tkinter as tk
from tkinter import scrolledtext
from tkinter import ttk

from support_agent.api.service import (
    get_conversation_messages,
    key_status,
    reset_chat,
    run_support_chat,
    set_voice_enabled,
)
from support_agent.config.settings import settings
from support_agent.domain.exceptions import BusinessError

PROVIDER_CHOICES = {"Gemini": "gemini", "OpenAI": "openai"}


class App:
    def __init__(self, root):
        self.root = root
        self.root.title("AI Tech Support Trainer")
        self.sending = False
        header = tk.Frame(root)
        header.pack(fill=tk.X)
        self.voice_var = tk.BooleanVar(value=settings.voice_enabled)
        tk.Checkbutton(header, text="Voice", variable=self.voice_var, command=self.on_toggle_voice).pack(side=tk.LEFT)
        default_label = next(
            (label for label, name in PROVIDER_CHOICES.items() if name == settings.default_provider),
            "Gemini",
        )
        self.provider = ttk.Combobox(header, values=list(PROVIDER_CHOICES), state="readonly", width=10)
        self.provider.set(default_label)
        self.provider.pack(side=tk.LEFT)
        self.provider.bind("<<ComboboxSelected>>", lambda e: self.refresh_key_status())
        self.key_label = tk.Label(header, text="")
        self.key_label.pack(side=tk.LEFT)
        tk.Button(header, text="Reset Chat", command=self.on_reset).pack(side=tk.RIGHT)
        self.chat = scrolledtext.ScrolledText(root, width=80, height=24, wrap=tk.WORD)
        self.chat.pack(fill=tk.BOTH, expand=True)
        self.chat.tag_config("user", foreground="#1a73e8")
        self.chat.tag_config("agent", foreground="#34a853")
        self.chat.tag_config("system", foreground="#5f6368")
        self.chat.tag_config("error", foreground="#d93025")
        row = tk.Frame(root)
        row.pack(fill=tk.X)
        self.entry = tk.Entry(row)
        self.entry.pack(side=tk.LEFT, fill=tk.X, expand=True)
        self.entry.bind("<Return>", self.on_send_event)
        self.send_btn = tk.Button(row, text="Send", command=self.on_send)
        self.send_btn.pack(side=tk.LEFT)
        self.refresh_key_status()
        self.render()

    def selected_provider(self) -> str:
        return PROVIDER_CHOICES.get(self.provider.get(), "gemini")

    def refresh_key_status(self):
        self.key_label.config(text=key_status(self.selected_provider()))

    def render(self, pending=None):
        self.chat.delete(1.0, tk.END)
        msgs = get_conversation_messages()
        for m in msgs:
            tag = m["role"]
            if m["role"] == "agent" and m["content"].startswith("Error: "):
                tag = "error"
            self.chat.insert(tk.END, f"{m['label']}: {m['content']}\n\n", tag)
        if pending is not None:
            # 后台线程可能还没把用户消息写入会话
            if not msgs or msgs[-1]["role"] != "user":
                self.chat.insert(tk.END, f"You: {pending}\n\n", "user")
            self.chat.insert(tk.END, f"Optimum Agent ({self.selected_provider()}): Thinking...\n", "system")
        self.chat.see(tk.END)

    def set_sending(self, sending):
        self.sending = sending
        state = tk.DISABLED if sending else tk.NORMAL
        self.entry.config(state=state)
        self.send_btn.config(state=state, text=f"{self.provider.get()}..." if sending else "Send")

    def on_toggle_voice(self):
        set_voice_enabled(self.voice_var.get())

    def on_reset(self):
        reset_chat(self.selected_provider())
        self.entry.delete(0, tk.END)
        self.set_sending(False)
        self.render()

    def on_send(self):
        if self.sending:
            return
        text = self.entry.get()
        if not text.strip():
            return
        provider = self.selected_provider()
        self.entry.delete(0, tk.END)
        self.set_sending(True)

        def worker():
            try:
                res = run_support_chat(text, provider)
                self.root.after(0, lambda: self.on_response(res, None))
            except Exception as exc:
                self.root.after(0, lambda err=exc: self.on_response(None, err))

        threading.Thread(target=worker, daemon=True).start()
        self.render(pending=text)

    def on_send_event(self, event):
        self.on_send()
        return "break"

    def on_response(self, res, err):
        self.set_sending(False)
        self.render()
        if err:
            if isinstance(err, BusinessError):
                line = f"[{err.code}] {err.message}"
            else:
                line = f"Error: {err}"
            self.chat.insert(tk.END, line + "\n", "error")
            self.chat.see(tk.END)


def main():
    root = tk.Tk()
    App(root)
    root.mainloop()


if __name__ == "__main__":
    main()
