"""NiceGUI chat interface with sidebar, thinking traces and settings."""

from nicegui import app, ui

from src.agent.completion_client import get_completion_client
from src.models.schemas import Chat, FontSize, Role, SendStatus, Theme, Turn
from src.session.controller import ChatController
from src.session.store import SessionStore
from src.storage.repository import ChatRepository

FONT_SIZE_CLASSES = {
    FontSize.SMALL: "text-sm",
    FontSize.MEDIUM: "text-base",
    FontSize.LARGE: "text-lg",
}

CUSTOM_CSS = """
<style>
    .message-user { border-radius: 18px 18px 4px 18px; }
    .message-assistant { border-radius: 18px 18px 18px 4px; }
    .chat-item { border-radius: 8px; cursor: pointer; }
    .thinking { border-left: 3px solid #6b7280; }
</style>
"""

_controller: ChatController | None = None


def get_chat_controller() -> ChatController:
    """Get or create the controller backed by NiceGUI general storage.

    Returns:
        The ChatController instance.
    """
    global _controller
    if _controller is None:
        repository = ChatRepository(app.storage.general)
        _controller = ChatController(
            store=SessionStore(repository),
            client=get_completion_client(),
            repository=repository,
        )
    return _controller


def format_elapsed(ms: int) -> str:
    """Format an elapsed time for the thinking header."""
    if ms < 1000:
        return f"{ms} ms"
    return f"{ms / 1000:.1f} s"


@ui.page("/")
def chat_page() -> None:
    """Main chat page."""
    ui.add_head_html(CUSTOM_CSS)
    controller = get_chat_controller()
    store = controller.store
    dark = ui.dark_mode(controller.settings.theme == Theme.DARK)

    input_field: ui.textarea
    search_query = ""

    def is_light() -> bool:
        return controller.settings.theme == Theme.LIGHT

    def refresh_all() -> None:
        sidebar.refresh()
        conversation.refresh()

    # === Chat actions ===

    def new_chat() -> None:
        store.create_chat()
        input_field.value = ""
        refresh_all()

    def select_chat(chat_id: str) -> None:
        store.select_chat(chat_id)
        refresh_all()

    def delete_chat(chat_id: str) -> None:
        store.delete_chat(chat_id)
        refresh_all()

    def confirm_delete(chat: Chat) -> None:
        with ui.dialog() as dialog, ui.card().classes("w-96"):
            ui.label(f'Delete "{chat.title}"?').classes("text-lg font-semibold")
            ui.label("This chat and all of its messages will be removed.").classes(
                "text-sm text-gray-500"
            )

            def apply() -> None:
                dialog.close()
                delete_chat(chat.id)

            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Delete", on_click=apply).props("color=negative")
        dialog.open()

    def apply_search(value: str | None) -> None:
        nonlocal search_query
        search_query = value or ""
        sidebar.refresh()

    def copy_turn(turn: Turn) -> None:
        ui.clipboard.write(turn.content)
        ui.notify("Copied to clipboard")

    def open_rename(chat: Chat) -> None:
        with ui.dialog() as dialog, ui.card().classes("w-96"):
            ui.label("Rename chat").classes("text-lg font-semibold")
            title_input = ui.input("Title", value=chat.title).classes("w-full")

            def apply() -> None:
                title = title_input.value.strip()
                if title:
                    store.rename_chat(chat.id, title)
                    sidebar.refresh()
                dialog.close()

            title_input.on("keydown.enter", apply)
            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", on_click=apply)
        dialog.open()

    def edit_turn(index: int) -> None:
        chat = store.selected_chat
        if chat is not None and store.begin_edit(index):
            input_field.value = chat.turns[index].content
            conversation.refresh()

    def cancel_edit() -> None:
        store.cancel_edit()
        input_field.value = ""
        conversation.refresh()

    async def send_message() -> None:
        text = input_field.value or ""
        if not text.strip() or controller.is_loading:
            return

        input_field.value = ""
        result = await controller.send_message(text, on_sent=refresh_all)

        if result.status == SendStatus.FAILED:
            ui.notify(result.error or "Failed to get AI response", type="negative")
        refresh_all()

    # === Settings ===

    def apply_theme(value: str) -> None:
        controller.update_settings(theme=value)
        dark.value = controller.settings.theme == Theme.DARK
        refresh_all()

    def apply_font_size(value: str) -> None:
        controller.update_settings(font_size=value)
        conversation.refresh()

    def apply_timestamps(value: bool) -> None:
        controller.update_settings(show_timestamps=value)
        conversation.refresh()

    def open_settings() -> None:
        settings = controller.settings
        with ui.dialog() as dialog, ui.card().classes("w-96"):
            ui.label("Settings").classes("text-lg font-semibold")
            ui.label("Theme").classes("text-sm text-gray-500")
            ui.toggle(
                {Theme.LIGHT.value: "Light", Theme.DARK.value: "Dark"},
                value=settings.theme.value,
                on_change=lambda e: apply_theme(e.value),
            )
            ui.label("Font size").classes("text-sm text-gray-500")
            ui.select(
                {
                    FontSize.SMALL.value: "Small",
                    FontSize.MEDIUM.value: "Medium",
                    FontSize.LARGE.value: "Large",
                },
                value=settings.font_size.value,
                on_change=lambda e: apply_font_size(e.value),
            ).classes("w-full")
            ui.switch(
                "Show timestamps",
                value=settings.show_timestamps,
                on_change=lambda e: apply_timestamps(e.value),
            )
            with ui.row().classes("w-full justify-end"):
                ui.button("Close", on_click=dialog.close).props("flat")
        dialog.open()

    # === Rendering ===

    @ui.refreshable
    def sidebar() -> None:
        selected_id = store.selected_chat_id
        chats = store.search_chats(search_query)
        with ui.column().classes("w-full gap-1"):
            if not chats:
                empty = "No chats found" if search_query.strip() else "No chats yet"
                ui.label(empty).classes("text-sm text-gray-400 p-2")
            for chat in chats:
                active = chat.id == selected_id
                highlight = "bg-blue-600 text-white" if active else ""
                with ui.row().classes(
                    f"chat-item w-full items-center no-wrap px-2 py-1 {highlight}"
                ).on("click", lambda _, cid=chat.id: select_chat(cid)):
                    ui.icon("chat_bubble_outline").classes("text-base")
                    ui.label(chat.title).classes("flex-grow truncate text-sm")
                    ui.button(
                        icon="edit", on_click=lambda _, c=chat: open_rename(c)
                    ).props("flat round dense size=sm")
                    ui.button(
                        icon="delete", on_click=lambda _, c=chat: confirm_delete(c)
                    ).props("flat round dense size=sm")

    def render_welcome() -> None:
        stats = controller.stats()
        with ui.column().classes("w-full h-full items-center justify-center gap-4 p-8"):
            ui.icon("psychology").classes("text-6xl text-blue-500")
            ui.label("Welcome to Thinking Chat").classes("text-2xl font-semibold")
            with ui.row().classes("gap-4"):
                for caption, value in (
                    ("Chats", str(stats.total_chats)),
                    ("Messages", str(stats.total_messages)),
                    ("Avg. response", format_elapsed(stats.average_response_time_ms)),
                ):
                    with ui.card().classes("items-center px-6"):
                        ui.label(value).classes("text-xl font-bold")
                        ui.label(caption).classes("text-xs text-gray-500")
            ui.button("New chat", icon="add", on_click=new_chat)

    def render_turn(index: int, turn: Turn) -> None:
        is_user = turn.role == Role.USER
        align = "justify-end" if is_user else "justify-start"
        if is_user:
            bubble = "message-user bg-blue-600 text-white"
        elif is_light():
            bubble = "message-assistant bg-gray-100 text-gray-900"
        else:
            bubble = "message-assistant bg-gray-800 text-gray-100"
        editing = store.pending_edit_index == index

        with ui.row().classes(f"w-full {align} gap-3 items-end"):
            with ui.column().classes("max-w-[75%] gap-1"):
                if turn.reasoning:
                    elapsed = format_elapsed(turn.reasoning_elapsed_ms or 0)
                    with ui.expansion(f"Thought for {elapsed}", icon="psychology").classes(
                        "w-full text-sm text-gray-500"
                    ):
                        ui.markdown(turn.reasoning).classes("thinking pl-3 text-gray-500")
                ring = " ring-2 ring-yellow-400" if editing else ""
                with ui.element("div").classes(f"px-4 py-3 {bubble}{ring}"):
                    if is_user:
                        ui.label(turn.content).classes("whitespace-pre-wrap")
                    else:
                        ui.markdown(turn.content)
                with ui.row().classes(
                    f"items-center gap-1 {'self-end' if is_user else 'self-start'}"
                ):
                    if controller.settings.show_timestamps:
                        ui.label(
                            turn.created_at.astimezone().strftime("%I:%M %p")
                        ).classes("text-[10px] text-gray-400")
                    ui.button(
                        icon="content_copy", on_click=lambda _, t=turn: copy_turn(t)
                    ).props("flat round dense size=xs")
                    if is_user and not controller.is_loading:
                        ui.button(
                            icon="edit", on_click=lambda _, i=index: edit_turn(i)
                        ).props("flat round dense size=xs")

    @ui.refreshable
    def conversation() -> None:
        font = FONT_SIZE_CLASSES[controller.settings.font_size]
        chat = store.selected_chat
        if chat is None or not chat.turns:
            render_welcome()
            return
        with ui.column().classes(f"w-full gap-4 p-5 {font}"):
            for index, turn in enumerate(chat.turns):
                render_turn(index, turn)
            if controller.is_loading:
                with ui.row().classes("items-center gap-3"):
                    ui.spinner(size="md")
                    ui.label("AI is thinking...").classes("text-gray-500 italic")
            if store.pending_edit_index is not None:
                with ui.row().classes("items-center gap-2"):
                    ui.label("Editing a message. Sending will discard the turns after it.").classes(
                        "text-xs text-yellow-600"
                    )
                    ui.button("Cancel edit", on_click=cancel_edit).props("flat dense size=sm")

    # === UI Layout ===
    with ui.left_drawer(value=True).classes("p-3") as drawer:
        ui.button("New chat", icon="add", on_click=new_chat).classes("w-full")
        ui.separator()
        ui.input(
            placeholder="Search chats...",
            on_change=lambda e: apply_search(e.value),
        ).props("dense clearable outlined").classes("w-full")
        sidebar()
        ui.space()
        ui.button("Settings", icon="settings", on_click=open_settings).props(
            "flat"
        ).classes("w-full")

    with ui.header().classes("items-center px-4 py-2"):
        ui.button(icon="menu", on_click=drawer.toggle).props("flat round color=white")
        ui.label("Thinking Chat").classes("text-lg font-semibold")

    with ui.column().classes("w-full max-w-4xl mx-auto").style(
        "min-height: calc(100vh - 12rem)"
    ):
        conversation()

    with ui.footer().classes("bg-transparent p-4"):
        with ui.row().classes("w-full max-w-4xl mx-auto gap-3 items-end no-wrap"):
            input_field = (
                ui.textarea(placeholder="Type your message...")
                .props("autogrow outlined dense rows=2")
                .classes("flex-grow")
                .on("keydown.enter.exact.prevent", send_message)
            )
            ui.button(icon="send", on_click=send_message).props("round unelevated")
