"""NiceGUI chat interface backed by ChatSession."""

from datetime import datetime

from nicegui import events, ui

from gemini_chatbot.ui.animation import animate_typing
from gemini_chatbot.ui.session import ChatSession

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .message-user {
        background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
        color: white;
        border-radius: 18px 18px 4px 18px;
    }

    .message-bot {
        background: #f3f4f6;
        color: #1f2937;
        border-radius: 18px 18px 18px 4px;
    }

    .avatar-user { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }
    .avatar-bot { background: #6b7280; }

    .status-dot { width: 8px; height: 8px; border-radius: 50%; }
    .status-dot.online { background: #10B981; }
    .status-dot.offline { background: #EF4444; }

    .typing-dot {
        width: 8px; height: 8px;
        background: #667eea;
        border-radius: 50%;
        animation: bounce 1.4s infinite ease-in-out;
    }
    .typing-dot:nth-child(2) { animation-delay: 0.2s; }
    .typing-dot:nth-child(3) { animation-delay: 0.4s; }

    @keyframes bounce {
        0%, 60%, 100% { transform: translateY(0); }
        30% { transform: translateY(-6px); }
    }

    .input-box {
        background: #f9fafb;
        border: 1px solid #e5e7eb;
        border-radius: 12px;
        transition: border-color 0.2s;
    }
    .input-box:focus-within { border-color: #667eea; }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }

    .message-bot p { margin: 0; }
    .message-bot pre { margin: 0.5rem 0; }
</style>
"""

# Forwards browser connectivity changes to the server as NiceGUI events
CONNECTIVITY_JS = """
<script>
    window.addEventListener('online', () => emitEvent('browser_online'));
    window.addEventListener('offline', () => emitEvent('browser_offline'));
</script>
"""

WELCOME_TITLE = "Welcome to AI Chatbot"
WELCOME_TEXT = "Your intelligent assistant powered by Google's Gemini. Ask me anything!"


class NiceGUIChatView:
    """Renders a ChatSession into NiceGUI elements."""

    def __init__(
        self,
        messages_container: ui.column,
        scroll_area: ui.scroll_area,
        typing_row: ui.row,
        status_dot: ui.element,
        status_label: ui.label,
        welcome: ui.column | None = None,
    ) -> None:
        self.messages_container = messages_container
        self.scroll_area = scroll_area
        self.typing_row = typing_row
        self.status_dot = status_dot
        self.status_label = status_label
        self.welcome = welcome

    def _render_avatar(self, sender: str) -> None:
        icon = "person" if sender == "user" else "smart_toy"
        with ui.element("div").classes(
            f"w-9 h-9 rounded-full flex items-center justify-center avatar-{sender}"
        ):
            ui.icon(icon).classes("text-white text-lg")

    def _bubble(self, sender: str) -> ui.element:
        """Create an empty message bubble and return the element to fill."""
        if self.welcome is not None:
            self.welcome.delete()
            self.welcome = None
        is_user = sender == "user"
        align = "justify-end" if is_user else "justify-start"
        with self.messages_container, ui.row().classes(f"w-full {align} gap-3 items-end"):
            if not is_user:
                self._render_avatar(sender)
            with ui.column().classes("max-w-[70%] gap-1"):
                bubble = ui.element("div").classes(f"px-4 py-3 message-{sender}")
                ui.label(datetime.now().strftime("%I:%M %p")).classes(
                    f"text-[10px] text-gray-400 {'self-end' if is_user else 'self-start'}"
                )
            if is_user:
                self._render_avatar(sender)
        return bubble

    def scroll_to_bottom(self) -> None:
        self.scroll_area.scroll_to(percent=1.0)

    def append_message(self, sender: str, text: str) -> None:
        with self._bubble(sender):
            ui.label(text).classes("text-sm leading-relaxed whitespace-pre-wrap")
        self.scroll_to_bottom()

    async def type_message(self, sender: str, text: str) -> None:
        with self._bubble(sender):
            content = ui.markdown("").classes("text-sm leading-relaxed")

        def render(partial: str) -> None:
            content.set_content(partial)
            self.scroll_to_bottom()

        await animate_typing(text, render)

    def notify(self, message: str, type: str) -> None:
        ui.notify(message, type=type, position="top-right")

    def set_connection_status(self, online: bool) -> None:
        self.status_dot.classes(
            add="online" if online else "offline",
            remove="offline" if online else "online",
        )
        self.status_label.set_text("Online" if online else "Offline")

    def show_typing_indicator(self) -> None:
        self.typing_row.set_visibility(True)
        self.scroll_to_bottom()

    def hide_typing_indicator(self) -> None:
        self.typing_row.set_visibility(False)

    def clear(self) -> None:
        self.messages_container.clear()
        with self.messages_container:
            self.welcome = render_welcome()


def render_welcome() -> ui.column:
    with ui.column().classes("w-full h-64 items-center justify-center gap-3") as welcome:
        ui.icon("auto_awesome").classes("text-5xl text-gray-300")
        ui.label(WELCOME_TITLE).classes("text-lg text-gray-500")
        ui.label(WELCOME_TEXT).classes("text-sm text-gray-400 text-center")
    return welcome


@ui.page("/chat")
async def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    ui.add_body_html(CONNECTIVITY_JS)

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-3xl mx-auto app-container").style(
            "height: calc(100vh - 4rem)"
        ),
    ):
        # Header
        with ui.row().classes("w-full header px-5 py-4 items-center justify-between"):
            with ui.row().classes("items-center gap-3"):
                ui.icon("smart_toy").classes("text-white text-3xl")
                ui.label("Gemini AI Chatbot").classes("text-lg font-semibold text-white")
            with ui.row().classes("items-center gap-3"):
                with ui.element("div").classes(
                    "bg-white/20 rounded-full px-3 py-1 flex items-center gap-2"
                ):
                    status_dot = ui.element("div").classes("status-dot offline")
                    status_label = ui.label("Offline").classes("text-xs text-white/80")
                new_chat_btn = ui.button(icon="add").props("flat round color=white")

        # Messages
        with ui.scroll_area().classes("flex-grow w-full bg-gray-50") as scroll_area:
            with ui.column().classes("w-full p-5"):
                messages_container = ui.column().classes("w-full gap-4")
                with messages_container:
                    welcome = render_welcome()
                with ui.row().classes("w-full justify-start gap-3 items-end") as typing_row:
                    with ui.element("div").classes("message-bot px-4 py-3"):
                        with ui.row().classes("gap-1"):
                            for _ in range(3):
                                ui.element("div").classes("typing-dot")
                typing_row.set_visibility(False)

        # Input
        with ui.row().classes("w-full p-4 gap-3 items-end bg-white border-t"):
            upload = (
                ui.upload(auto_upload=True)
                .props("accept='image/*,audio/*,.pdf,.doc,.docx,.txt' flat")
                .classes("hidden")
            )
            ui.button(icon="attach_file", on_click=lambda: upload.run_method("pickFiles")).props(
                "flat round"
            )
            with ui.element("div").classes("flex-grow input-box px-3 py-2"):
                input_field = (
                    ui.textarea(placeholder="Type a message...")
                    .props("autogrow borderless dense rows=1")
                    .classes("w-full")
                )
            send_btn = ui.button(icon="send").props("round unelevated").classes("send-btn")

    view = NiceGUIChatView(
        messages_container, scroll_area, typing_row, status_dot, status_label, welcome
    )
    session = ChatSession(view)

    async def send_message() -> None:
        text = input_field.value or ""
        if session.is_processing or not text.strip():
            return
        input_field.value = ""
        send_btn.disable()
        try:
            await session.submit(text)
        finally:
            send_btn.enable()

    async def handle_upload(e: events.UploadEventArguments) -> None:
        content = await e.file.read()
        await session.attach_file(e.file.name, content, e.file.content_type)
        upload.reset()

    def new_chat() -> None:
        session.clear_conversation()
        view.clear()

    input_field.on("keydown.enter.prevent", send_message)
    send_btn.on_click(send_message)
    new_chat_btn.on_click(new_chat)
    upload.on_upload(handle_upload)

    ui.on("browser_online", session.on_browser_online)
    ui.on("browser_offline", session.on_browser_offline)
    ui.timer(0.1, session.check_connection, once=True)


def main() -> None:
    ui.run(title="Gemini AI Chatbot", port=8080, reload=False)


if __name__ == "__main__":
    main()
