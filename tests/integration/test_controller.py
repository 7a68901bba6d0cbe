"""Integration tests for the interaction controller workflows.

Upload, deletion and query flows run end to end against the fake backend.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest_check as check

from rag_console.client.errors import TransportError
from rag_console.client.files import BufferedFile
from rag_console.client.service import RagServiceClient
from rag_console.controller import UPLOAD_PRECONDITION_MESSAGE, InteractionController
from rag_console.models.schemas import ChatMode, DocType
from rag_console.state.store import (
    UPLOAD_FAILED,
    UPLOAD_SUCCEEDED,
    AppState,
    SelectionField,
    StateStore,
)
from tests.fake_backend import FakeBackend


async def accept(_doc_id: str) -> bool:
    return True


async def decline(_doc_id: str) -> bool:
    return False


class TestStartup:
    """Tests for the initial load."""

    async def test_start_loads_documents_and_models(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        backend.add_document("abc123")

        await controller.start()

        state = controller.state
        check.equal([doc.id for doc in state.documents], ["abc123"])
        check.equal(state.model_names, ["llama3", "mistral"])
        check.equal(state.selected_model, "llama3")
        check.is_none(state.notice)

    async def test_malformed_models_leave_screen_usable(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        """models: "not-an-array" yields no models, no selection and no error."""
        backend.models_payload = {"models": "not-an-array"}
        backend.add_document("abc123")

        await controller.start()

        state = controller.state
        check.equal(state.models, ())
        check.equal(state.selected_model, "")
        check.equal(state.error_message, "")
        check.equal(len(state.documents), 1)

    async def test_array_models_body_leaves_screen_usable(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        """A bare JSON array from /models is treated as no models, not an error."""
        await controller.refresh_models()
        backend.models_payload = [{"name": "llama3"}]

        await controller.refresh_models()

        state = controller.state
        check.equal(state.models, ())
        check.equal(state.selected_model, "")
        check.equal(state.error_message, "")

    async def test_unreachable_backend_becomes_notice(self, store: StateStore) -> None:
        client = AsyncMock(spec=RagServiceClient)
        client.list_documents.side_effect = TransportError("Connection failed: refused")
        client.list_models.side_effect = TransportError("Connection failed: refused")
        controller = InteractionController(store, client)

        await controller.start()

        check.equal(store.state.models, ())
        check.equal(store.state.error_message, "Failed to fetch models: Connection failed: refused")


class TestUploadWorkflow:
    """Tests for the sequential upload workflow."""

    def prepare(self, controller: InteractionController, *files: BufferedFile) -> None:
        controller.select(SelectionField.DOCUMENT_TYPE, DocType.DUT.value)
        controller.select_files(files)

    async def test_uploads_files_in_order_then_refreshes(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        self.prepare(
            controller, BufferedFile("first.txt", b"one"), BufferedFile("second.txt", b"two")
        )

        await controller.upload()

        state = controller.state
        check.equal([body["content"] for body in backend.ingested], ["one", "two"])
        check.equal({body["doc_type"] for body in backend.ingested}, {"DUT"})
        check.equal(backend.document_list_calls, 1)
        check.equal(len(state.documents), 2)
        check.equal(state.upload_status, UPLOAD_SUCCEEDED)
        check.equal(state.pending_files, ())
        check.is_false(state.is_loading)

    async def test_second_file_failure_aborts_without_refresh(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        """First ingest succeeds, second returns 500: abort, no document refresh."""
        backend.fail_process_on_call = 2
        self.prepare(
            controller,
            BufferedFile("first.txt", b"one"),
            BufferedFile("second.txt", b"two"),
            BufferedFile("third.txt", b"three"),
        )

        await controller.upload()

        state = controller.state
        check.equal(backend.process_calls, 2)
        check.equal(backend.document_list_calls, 0)
        check.equal(state.upload_status, UPLOAD_FAILED)
        check.is_in("second.txt", state.error_message)
        check.is_in("500", state.error_message)
        check.equal(state.pending_files, ())
        check.is_false(state.is_loading)

    async def test_missing_type_is_validation_notice(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        controller.select_files([BufferedFile("a.txt", b"a")])

        await controller.upload()

        check.equal(controller.state.error_message, UPLOAD_PRECONDITION_MESSAGE)
        check.equal(backend.process_calls, 0)
        check.is_false(controller.state.is_loading)

    async def test_missing_files_is_validation_notice(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        controller.select(SelectionField.DOCUMENT_TYPE, DocType.REPORT.value)

        await controller.upload()

        check.equal(controller.state.error_message, UPLOAD_PRECONDITION_MESSAGE)
        check.equal(backend.process_calls, 0)

    async def test_ignored_while_upload_running(self) -> None:
        store = StateStore(
            AppState(
                is_loading=True,
                document_type=DocType.DUT,
                pending_files=(BufferedFile("a.txt", b"a"),),
            )
        )
        client = AsyncMock(spec=RagServiceClient)
        controller = InteractionController(store, client)

        await controller.upload()

        client.ingest_document.assert_not_awaited()
        assert store.state.is_loading is True


class TestDeletionWorkflow:
    """Tests for confirmed deletion."""

    async def test_confirmed_deletion_refreshes_list(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        backend.add_document("abc123")
        backend.add_document("keep")
        await controller.refresh_documents()

        await controller.delete_document("abc123", accept)

        state = controller.state
        check.equal([doc.id for doc in state.documents], ["keep"])
        check.equal(backend.document_list_calls, 2)
        check.equal(state.upload_status, "Document abc123 deleted")

    async def test_declined_deletion_does_nothing(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        backend.add_document("abc123")
        await controller.refresh_documents()

        await controller.delete_document("abc123", decline)

        check.is_in("abc123", backend.documents)
        check.equal(backend.document_list_calls, 1)
        check.is_none(controller.state.notice)

    async def test_failed_deletion_keeps_stale_list(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        backend.add_document("abc123")
        await controller.refresh_documents()
        backend.fail_delete = True

        await controller.delete_document("abc123", accept)

        state = controller.state
        check.equal([doc.id for doc in state.documents], ["abc123"])
        check.equal(backend.document_list_calls, 1)
        check.is_true(state.error_message.startswith("Failed to delete:"))


class TestQueryWorkflow:
    """Tests for the query workflow."""

    async def test_dut_query_appends_history(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        backend.answers["dut"] = {"result": "It is a test"}
        controller.select(SelectionField.CHAT_MODE, ChatMode.DUT.value)
        controller.set_query_input("What is DUT?")

        await controller.submit_query()

        state = controller.state
        check.equal(backend.queries, [("dut", "What is DUT?")])
        check.equal(len(state.history), 1)
        check.equal(state.history[0].question, "What is DUT?")
        check.equal(state.history[0].answer, "It is a test")
        check.equal(state.query_input, "")
        check.is_false(state.is_processing)

    async def test_blank_input_is_ignored(self, store: StateStore) -> None:
        """Whitespace-only input makes no call and changes nothing."""
        client = AsyncMock(spec=RagServiceClient)
        controller = InteractionController(store, client)
        controller.set_query_input("   \n\t")
        before = store.state

        await controller.submit_query()

        client.submit_query.assert_not_awaited()
        assert store.state is before

    async def test_rejected_while_processing(self) -> None:
        store = StateStore(AppState(is_processing=True, query_input="second question"))
        client = AsyncMock(spec=RagServiceClient)
        controller = InteractionController(store, client)
        before = store.state

        await controller.submit_query()

        client.submit_query.assert_not_awaited()
        assert store.state is before

    async def test_second_submission_during_flight_is_dropped(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        backend.query_gate = asyncio.Event()
        controller.set_query_input("first")

        first = asyncio.create_task(controller.submit_query())
        while not backend.queries:
            await asyncio.sleep(0)
        check.is_true(controller.state.is_processing)

        await controller.submit_query()
        backend.query_gate.set()
        await first

        check.equal(backend.queries, [("full", "first")])
        check.equal(len(controller.state.history), 1)

    async def test_deletion_may_run_while_query_in_flight(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        backend.add_document("abc123")
        backend.query_gate = asyncio.Event()
        controller.set_query_input("slow question")

        query = asyncio.create_task(controller.submit_query())
        while not backend.queries:
            await asyncio.sleep(0)

        await controller.delete_document("abc123", accept)
        check.equal(controller.state.documents, ())
        check.is_true(controller.state.is_processing)

        backend.query_gate.set()
        await query
        check.is_false(controller.state.is_processing)

    async def test_failed_query_shows_inline_error(
        self, controller: InteractionController, backend: FakeBackend
    ) -> None:
        del backend.answers["full"]
        controller.set_query_input("hello")

        await controller.submit_query()

        state = controller.state
        check.equal(state.history, ())
        check.is_true(state.response.startswith("Error: API responded with status 404"))
        check.is_true(state.response_is_error)
        check.equal(state.query_input, "hello")
        check.is_false(state.is_processing)


class TestSelection:
    """Tests for selector intents."""

    async def test_invalid_selection_becomes_notice(
        self, controller: InteractionController
    ) -> None:
        await controller.refresh_models()

        controller.select(SelectionField.SELECTED_MODEL, "gpt-unknown")

        check.equal(controller.state.selected_model, "llama3")
        check.equal(controller.state.error_message, "Unknown model: gpt-unknown")

    async def test_valid_model_selection(self, controller: InteractionController) -> None:
        await controller.refresh_models()

        controller.select(SelectionField.SELECTED_MODEL, "mistral")

        assert controller.state.selected_model == "mistral"
