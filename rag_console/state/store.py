"""Application state snapshot, events and reducer.

The console's state is an immutable AppState. Every change goes through
reduce(state, event), which returns a new snapshot and performs no I/O.
StateStore holds the current snapshot and notifies subscribers after each
committed transition, so the UI never observes a half-applied change.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict

from rag_console.client.errors import ValidationError
from rag_console.client.files import PendingFile
from rag_console.models.schemas import (
    ChatMode,
    ChatTurn,
    DocType,
    Document,
    ModelDescriptor,
)

logger = logging.getLogger(__name__)

UPLOAD_IN_PROGRESS = "Uploading..."
UPLOAD_SUCCEEDED = "Upload completed successfully"
UPLOAD_FAILED = "Upload failed"


class SelectionField(str, Enum):
    """Fields the user can change through a selector."""

    SELECTED_MODEL = "selected_model"
    DOCUMENT_TYPE = "document_type"
    CHAT_MODE = "chat_mode"


class Notice(BaseModel):
    """Single-slot notice shown to the user."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["error", "status"]
    text: str


class AppState(BaseModel):
    """Snapshot of everything the console screen shows.

    Attributes:
        documents: Documents as last listed by the backend.
        models: Models as last listed by the backend.
        selected_model: Empty or the name of a listed model.
        document_type: Type for the next upload (None until chosen).
        chat_mode: Query route selector.
        upload_status: Last upload/deletion status notice.
        error_message: Last error notice; shown in preference to the status.
        is_loading: True while an upload workflow runs.
        pending_files: Files selected for the next upload, in order.
        query_input: Text currently in the question field.
        pending_question: Question captured when the running query started.
        response: Last answer shown, or the inline error of a failed query.
        response_is_error: True when ``response`` holds a query error.
        history: Completed chat turns, oldest first.
        is_processing: True while a query is in flight.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    documents: tuple[Document, ...] = ()
    models: tuple[ModelDescriptor, ...] = ()
    selected_model: str = ""
    document_type: DocType | None = None
    chat_mode: ChatMode = ChatMode.FULL
    upload_status: str = ""
    error_message: str = ""
    is_loading: bool = False
    pending_files: tuple[PendingFile, ...] = ()
    query_input: str = ""
    pending_question: str = ""
    response: str = ""
    response_is_error: bool = False
    history: tuple[ChatTurn, ...] = ()
    is_processing: bool = False

    @property
    def notice(self) -> Notice | None:
        """The notice to display; an error always wins over a status."""
        if self.error_message:
            return Notice(kind="error", text=self.error_message)
        if self.upload_status:
            return Notice(kind="status", text=self.upload_status)
        return None

    @property
    def model_names(self) -> list[str]:
        return [model.name for model in self.models]


# === Events ===


@dataclass(frozen=True)
class DocumentsLoaded:
    documents: tuple[Document, ...]


@dataclass(frozen=True)
class DocumentsLoadFailed:
    message: str


@dataclass(frozen=True)
class ModelsLoaded:
    models: tuple[ModelDescriptor, ...]


@dataclass(frozen=True)
class ModelsLoadFailed:
    message: str


@dataclass(frozen=True)
class SelectionChanged:
    field: SelectionField | str
    value: str | None


@dataclass(frozen=True)
class FilesSelected:
    files: tuple[PendingFile, ...]


@dataclass(frozen=True)
class QueryInputChanged:
    text: str


@dataclass(frozen=True)
class NoticeRaised:
    """A local error notice (e.g. a failed precondition)."""

    message: str


@dataclass(frozen=True)
class UploadStarted:
    pass


@dataclass(frozen=True)
class UploadFinished:
    succeeded: bool
    message: str = ""


@dataclass(frozen=True)
class DeletionFinished:
    doc_id: str
    succeeded: bool
    message: str = ""


@dataclass(frozen=True)
class QueryStarted:
    question: str


@dataclass(frozen=True)
class QueryFinished:
    """Outcome of a query; ``answer`` holds the error text on failure."""

    succeeded: bool
    answer: str


Event = (
    DocumentsLoaded
    | DocumentsLoadFailed
    | ModelsLoaded
    | ModelsLoadFailed
    | SelectionChanged
    | FilesSelected
    | QueryInputChanged
    | NoticeRaised
    | UploadStarted
    | UploadFinished
    | DeletionFinished
    | QueryStarted
    | QueryFinished
)


# === Transitions ===


def _documents_loaded(state: AppState, event: DocumentsLoaded) -> AppState:
    return state.model_copy(
        update={"documents": tuple(event.documents), "error_message": ""}
    )


def _documents_load_failed(state: AppState, event: DocumentsLoadFailed) -> AppState:
    return state.model_copy(update={"error_message": event.message})


def _models_loaded(state: AppState, event: ModelsLoaded) -> AppState:
    models = tuple(event.models)
    names = [model.name for model in models]
    selected = state.selected_model
    if selected not in names:
        selected = names[0] if names else ""
    return state.model_copy(update={"models": models, "selected_model": selected})


def _models_load_failed(state: AppState, event: ModelsLoadFailed) -> AppState:
    return state.model_copy(
        update={"models": (), "selected_model": "", "error_message": event.message}
    )


def _selection_changed(state: AppState, event: SelectionChanged) -> AppState:
    try:
        field = SelectionField(event.field)
    except ValueError as e:
        raise ValidationError(f"Unknown selection field: {event.field!r}") from e

    value = event.value or ""
    if field is SelectionField.SELECTED_MODEL:
        if value and value not in state.model_names:
            raise ValidationError(f"Unknown model: {value}")
        return state.model_copy(update={"selected_model": value})

    try:
        if field is SelectionField.DOCUMENT_TYPE:
            return state.model_copy(
                update={"document_type": DocType(value) if value else None}
            )
        return state.model_copy(update={"chat_mode": ChatMode(value)})
    except ValueError as e:
        raise ValidationError(f"Invalid value for {field.value}: {value!r}") from e


def _files_selected(state: AppState, event: FilesSelected) -> AppState:
    return state.model_copy(update={"pending_files": tuple(event.files)})


def _query_input_changed(state: AppState, event: QueryInputChanged) -> AppState:
    return state.model_copy(update={"query_input": event.text})


def _notice_raised(state: AppState, event: NoticeRaised) -> AppState:
    return state.model_copy(update={"error_message": event.message})


def _upload_started(state: AppState, event: UploadStarted) -> AppState:
    return state.model_copy(
        update={
            "is_loading": True,
            "error_message": "",
            "upload_status": UPLOAD_IN_PROGRESS,
        }
    )


def _upload_finished(state: AppState, event: UploadFinished) -> AppState:
    if event.succeeded:
        notices = {"upload_status": UPLOAD_SUCCEEDED, "error_message": ""}
    else:
        notices = {"upload_status": UPLOAD_FAILED, "error_message": event.message}
    # The pending set is emptied whatever the outcome
    return state.model_copy(
        update={"is_loading": False, "pending_files": (), **notices}
    )


def _deletion_finished(state: AppState, event: DeletionFinished) -> AppState:
    if event.succeeded:
        return state.model_copy(
            update={
                "upload_status": f"Document {event.doc_id} deleted",
                "error_message": "",
            }
        )
    return state.model_copy(update={"error_message": event.message})


def _query_started(state: AppState, event: QueryStarted) -> AppState:
    return state.model_copy(
        update={"is_processing": True, "pending_question": event.question}
    )


def _query_finished(state: AppState, event: QueryFinished) -> AppState:
    update: dict[str, object] = {
        "is_processing": False,
        "pending_question": "",
        "response": event.answer,
        "response_is_error": not event.succeeded,
    }
    if event.succeeded:
        turn = ChatTurn(question=state.pending_question, answer=event.answer)
        update["history"] = (*state.history, turn)
        update["query_input"] = ""
    return state.model_copy(update=update)


_TRANSITIONS: dict[type, Callable[[AppState, object], AppState]] = {
    DocumentsLoaded: _documents_loaded,
    DocumentsLoadFailed: _documents_load_failed,
    ModelsLoaded: _models_loaded,
    ModelsLoadFailed: _models_load_failed,
    SelectionChanged: _selection_changed,
    FilesSelected: _files_selected,
    QueryInputChanged: _query_input_changed,
    NoticeRaised: _notice_raised,
    UploadStarted: _upload_started,
    UploadFinished: _upload_finished,
    DeletionFinished: _deletion_finished,
    QueryStarted: _query_started,
    QueryFinished: _query_finished,
}


def reduce(state: AppState, event: Event) -> AppState:
    """Apply one event to a snapshot.

    Args:
        state: Current snapshot (left untouched).
        event: The event to apply.

    Returns:
        The next snapshot.

    Raises:
        ValidationError: If a SelectionChanged value is not acceptable.
        TypeError: If the event type is unknown.
    """
    transition = _TRANSITIONS.get(type(event))
    if transition is None:
        raise TypeError(f"Unsupported event: {type(event).__name__}")
    return transition(state, event)


Subscriber = Callable[[AppState], None]


class StateStore:
    """Owner of the current AppState.

    Subscribers are called with each committed snapshot, in subscription
    order, after the transition has been applied.
    """

    def __init__(self, initial: AppState | None = None) -> None:
        self._state = initial or AppState()
        self._subscribers: list[Subscriber] = []

    @property
    def state(self) -> AppState:
        return self._state

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register a subscriber.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def dispatch(self, event: Event) -> AppState:
        """Apply an event and notify subscribers.

        A rejected event (ValidationError) leaves the snapshot unchanged.
        """
        self._state = reduce(self._state, event)
        for callback in list(self._subscribers):
            try:
                callback(self._state)
            except Exception:
                logger.exception(f"State subscriber {callback!r} failed")
        return self._state
