"""Interaction controller for the RAG console.

Sequences backend calls and state transitions for each user workflow:

1. **Upload** - files are read and ingested strictly one after another and
   the loop stops at the first failure, so the failing file is named in the
   notice. The document list is reloaded only after every file succeeded.

2. **Deletion** - requires an explicit confirmation, then reloads the
   document list from the backend. The list is never patched locally.

3. **Query** - one query in flight at a time; the route follows the
   current chat mode.

Every RagConsoleError is caught here and turned into a notice, so nothing
raised by the backend or the network reaches the presentation layer.
"""

import logging
from collections.abc import Awaitable, Callable, Sequence

from rag_console.client.errors import RagConsoleError, ValidationError
from rag_console.client.files import PendingFile
from rag_console.client.service import RagServiceClient
from rag_console.state.store import (
    AppState,
    DeletionFinished,
    DocumentsLoaded,
    DocumentsLoadFailed,
    FilesSelected,
    ModelsLoaded,
    ModelsLoadFailed,
    NoticeRaised,
    QueryFinished,
    QueryInputChanged,
    QueryStarted,
    SelectionChanged,
    SelectionField,
    StateStore,
    UploadFinished,
    UploadStarted,
)

logger = logging.getLogger(__name__)

UPLOAD_PRECONDITION_MESSAGE = "Please select files and a document type"

ConfirmCallback = Callable[[str], Awaitable[bool]]


class InteractionController:
    """Runs the console workflows against a store and a backend client."""

    def __init__(self, store: StateStore, client: RagServiceClient) -> None:
        self._store = store
        self._client = client

    @property
    def state(self) -> AppState:
        return self._store.state

    async def start(self) -> None:
        """Initial load: documents first, then models."""
        await self.refresh_documents()
        await self.refresh_models()

    async def refresh_documents(self) -> None:
        """Reload the document list from the backend."""
        try:
            documents = await self._client.list_documents()
        except RagConsoleError as e:
            logger.warning(f"Failed to fetch documents: {e}")
            self._store.dispatch(DocumentsLoadFailed(f"Failed to fetch documents: {e}"))
            return

        logger.info(f"Loaded {len(documents)} document(s)")
        self._store.dispatch(DocumentsLoaded(tuple(documents)))

    async def refresh_models(self) -> None:
        """Reload the model list from the backend."""
        try:
            models = await self._client.list_models()
        except RagConsoleError as e:
            logger.warning(f"Failed to fetch models: {e}")
            self._store.dispatch(ModelsLoadFailed(f"Failed to fetch models: {e}"))
            return

        logger.info(f"Loaded {len(models)} model(s)")
        self._store.dispatch(ModelsLoaded(tuple(models)))

    def select(self, field: SelectionField | str, value: str | None) -> None:
        """Change a selector; an unacceptable value becomes an error notice."""
        try:
            self._store.dispatch(SelectionChanged(field, value))
        except ValidationError as e:
            logger.warning(f"Rejected selection: {e}")
            self._store.dispatch(NoticeRaised(str(e)))

    def select_files(self, files: Sequence[PendingFile]) -> None:
        """Replace the pending upload set."""
        self._store.dispatch(FilesSelected(tuple(files)))

    def set_query_input(self, text: str) -> None:
        self._store.dispatch(QueryInputChanged(text))

    def _check_upload_preconditions(self, state: AppState) -> None:
        if not state.pending_files or state.document_type is None:
            raise ValidationError(UPLOAD_PRECONDITION_MESSAGE)

    async def upload(self) -> None:
        """Ingest every pending file, in order, then reload the documents.

        Ignored while another upload is running. Without files or a
        document type, only a validation notice is raised.
        """
        state = self.state
        if state.is_loading:
            logger.debug("Upload already in progress, ignoring request")
            return

        try:
            self._check_upload_preconditions(state)
        except ValidationError as e:
            self._store.dispatch(NoticeRaised(str(e)))
            return

        files = state.pending_files
        doc_type = state.document_type
        self._store.dispatch(UploadStarted())

        succeeded = False
        failure = "Upload failed: interrupted"
        try:
            for index, pending in enumerate(files, start=1):
                try:
                    content = await pending.read_text()
                    await self._client.ingest_document(content, doc_type)
                except RagConsoleError as e:
                    logger.warning(
                        f"Upload aborted at {pending.name} ({index}/{len(files)}): {e}"
                    )
                    failure = f"Upload failed: {pending.name}: {e}"
                    break
                logger.info(f"Ingested {pending.name} ({index}/{len(files)})")
            else:
                succeeded = True
        finally:
            # Completion is reached on every path: busy flag and pending set reset
            self._store.dispatch(UploadFinished(succeeded, "" if succeeded else failure))

        if succeeded:
            await self.refresh_documents()

    async def delete_document(self, doc_id: str, confirm: ConfirmCallback) -> None:
        """Delete a document after the user confirms.

        Args:
            doc_id: Id of the document to delete.
            confirm: Async callback asking the user; False cancels.
        """
        if not await confirm(doc_id):
            logger.debug(f"Deletion of {doc_id} cancelled")
            return

        try:
            await self._client.delete_document(doc_id)
        except RagConsoleError as e:
            logger.warning(f"Failed to delete {doc_id}: {e}")
            self._store.dispatch(
                DeletionFinished(doc_id, succeeded=False, message=f"Failed to delete: {e}")
            )
            return

        logger.info(f"Deleted document {doc_id}")
        self._store.dispatch(DeletionFinished(doc_id, succeeded=True))
        await self.refresh_documents()

    async def submit_query(self) -> None:
        """Send the current input on the route of the current chat mode.

        Blank input and submissions while a query is in flight are ignored.
        """
        state = self.state
        question = state.query_input
        if state.is_processing or not question.strip():
            return

        mode = state.chat_mode
        self._store.dispatch(QueryStarted(question))

        succeeded = False
        answer = "Error: interrupted"
        try:
            answer = await self._client.submit_query(question, mode)
            succeeded = True
        except RagConsoleError as e:
            logger.warning(f"Query on {mode.value} route failed: {e}")
            answer = f"Error: {e}"
        finally:
            self._store.dispatch(QueryFinished(succeeded, answer))
