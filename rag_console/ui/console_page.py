"""NiceGUI console page: document upload, document list and RAG chat."""

from nicegui import events, ui

from rag_console.client.files import BufferedFile
from rag_console.client.service import RagServiceClient
from rag_console.controller import InteractionController
from rag_console.models.schemas import ChatMode, DocType
from rag_console.state.store import AppState, SelectionField, StateStore

DOC_TYPE_LABELS = {
    DocType.DUT.value: "DUT guidelines",
    DocType.DUT_MANUAL.value: "DUT manual",
    DocType.REPORT.value: "Sample reports",
    DocType.OTHER.value: "Other documents",
}

CHAT_MODE_LABELS = {
    ChatMode.DUT.value: "DUT only",
    ChatMode.FULL.value: "DUT + other documents",
}

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .panel {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
    }

    .notice-error { background: #fef2f2; color: #991b1b; }
    .notice-status { background: #f0fdf4; color: #166534; }

    .history-box { background: #f9fafb; border-radius: 8px; }
</style>
"""


@ui.page("/")
def console_page() -> None:
    """Main console page. Each browser tab gets its own store and controller."""
    ui.add_head_html(CUSTOM_CSS)
    store = StateStore()
    controller = InteractionController(store, RagServiceClient())

    root: ui.column
    upload_widget: ui.upload
    model_select: ui.select
    input_field: ui.textarea
    send_btn: ui.button

    async def handle_file(e: events.UploadEventArguments) -> None:
        data = await e.file.read()
        pending = [*controller.state.pending_files, BufferedFile(e.file.name, data)]
        controller.select_files(pending)

    async def run_upload() -> None:
        await controller.upload()
        upload_widget.reset()

    async def confirm_delete(doc_id: str) -> bool:
        with root, ui.dialog() as dialog, ui.card():
            ui.label(f"Are you sure you want to delete document {doc_id}?")
            with ui.row().classes("w-full justify-end"):
                ui.button("Cancel", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("Delete", on_click=lambda: dialog.submit(True)).props(
                    "color=negative"
                )
        result = await dialog
        dialog.delete()
        return bool(result)

    async def delete(doc_id: str) -> None:
        await controller.delete_document(doc_id, confirm_delete)

    @ui.refreshable
    def render_notice() -> None:
        notice = store.state.notice
        if notice is None:
            return
        with ui.element("div").classes(f"w-full rounded-md p-4 notice-{notice.kind}"):
            ui.label(notice.text)

    @ui.refreshable
    def render_upload_controls() -> None:
        state = store.state
        with ui.row().classes("items-center gap-2"):
            ui.button(
                "Uploading..." if state.is_loading else "Upload",
                icon="upload",
                on_click=run_upload,
            ).props("unelevated").set_enabled(not state.is_loading)
            ui.button("Refresh", icon="refresh", on_click=controller.refresh_documents).props(
                "outline"
            )
            if state.is_loading:
                ui.spinner(size="md")
            if state.pending_files:
                ui.label(f"{len(state.pending_files)} file(s) selected").classes(
                    "text-sm text-gray-500"
                )
        if not state.models:
            ui.label(
                "No models available. Make sure the models are loaded on the server."
            ).classes("text-sm text-red-500")

    @ui.refreshable
    def render_documents() -> None:
        documents = store.state.documents
        if not documents:
            ui.label("No documents uploaded yet.").classes("text-gray-400")
            return
        for doc in documents:
            with ui.row().classes("w-full items-center justify-between bg-gray-50 rounded p-2"):
                with ui.row().classes("items-baseline gap-2"):
                    ui.label(doc.display_name).classes("font-semibold")
                    ui.label(f"({doc.doc_type_label})").classes("text-sm text-gray-500")
                ui.button(
                    icon="delete", on_click=lambda doc_id=doc.id: delete(doc_id)
                ).props("flat round color=negative")

    @ui.refreshable
    def render_history() -> None:
        state = store.state
        for turn in state.history:
            with ui.column().classes("w-full gap-1 mb-3"):
                ui.label(f"Q: {turn.question}").classes("font-semibold")
                ui.markdown(f"A: {turn.answer}").classes("ml-4")
        if state.is_processing:
            with ui.row().classes("w-full justify-center"):
                ui.spinner(size="lg")
        elif state.response_is_error:
            # Failed query: shown once, never recorded in history
            ui.label(state.response).classes("text-red-600 ml-4")

    def sync(state: AppState) -> None:
        model_select.set_options(state.model_names)
        if (model_select.value or "") != state.selected_model:
            model_select.value = state.selected_model or None
        model_select.set_enabled(bool(state.models))
        if input_field.value != state.query_input:
            input_field.value = state.query_input
        send_btn.set_enabled(not state.is_processing)
        render_notice.refresh()
        render_upload_controls.refresh()
        render_documents.refresh()
        render_history.refresh()

    # === UI Layout ===
    with ui.column().classes("w-full max-w-5xl mx-auto p-4 gap-6") as root:
        # Upload
        with ui.column().classes("w-full panel p-6 gap-4"):
            ui.label("Document Upload").classes("text-xl font-bold")
            with ui.row().classes("w-full gap-4"):
                ui.select(
                    DOC_TYPE_LABELS,
                    label="Document type",
                    on_change=lambda e: controller.select(SelectionField.DOCUMENT_TYPE, e.value),
                ).classes("flex-grow")
                model_select = ui.select(
                    [],
                    label="Model",
                    on_change=lambda e: controller.select(SelectionField.SELECTED_MODEL, e.value),
                ).classes("flex-grow")
            upload_widget = ui.upload(
                multiple=True, auto_upload=True, on_upload=handle_file
            ).props("flat bordered").classes("w-full")
            render_upload_controls()
            render_notice()

        # Documents
        with ui.column().classes("w-full panel p-6 gap-2"):
            with ui.row().classes("w-full items-center justify-between"):
                ui.label("Uploaded Documents").classes("text-xl font-bold")
                ui.icon("list").classes("text-2xl")
            render_documents()

        # Chat
        with ui.column().classes("w-full panel p-6 gap-4"):
            ui.label("RAG Query Interface").classes("text-xl font-bold")
            ui.select(
                CHAT_MODE_LABELS,
                value=store.state.chat_mode.value,
                label="Chat mode",
                on_change=lambda e: controller.select(SelectionField.CHAT_MODE, e.value),
            ).classes("w-64")
            with ui.scroll_area().classes("w-full h-96 history-box p-4"):
                render_history()
            with ui.row().classes("w-full gap-2 items-end"):
                input_field = (
                    ui.textarea(
                        placeholder="Type your question...",
                        on_change=lambda e: controller.set_query_input(e.value or ""),
                    )
                    .props("outlined rows=3")
                    .classes("flex-grow")
                )
                send_btn = ui.button(
                    "Send", icon="send", on_click=controller.submit_query
                ).props("unelevated")

    store.subscribe(sync)
    ui.timer(0.1, controller.start, once=True)
