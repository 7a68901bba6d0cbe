"""Application state store.

Pure state container for the console screen.

Responsibilities:
    - Immutable AppState snapshot of documents, models, selections,
      upload status and chat history
    - Typed events and the pure reduce() transition function
    - StateStore with subscribers for the presentation layer

Performs no I/O.
"""

from rag_console.state.store import (
    UPLOAD_FAILED,
    UPLOAD_IN_PROGRESS,
    UPLOAD_SUCCEEDED,
    AppState,
    DeletionFinished,
    DocumentsLoaded,
    DocumentsLoadFailed,
    Event,
    FilesSelected,
    ModelsLoaded,
    ModelsLoadFailed,
    Notice,
    NoticeRaised,
    QueryFinished,
    QueryInputChanged,
    QueryStarted,
    SelectionChanged,
    SelectionField,
    StateStore,
    UploadFinished,
    UploadStarted,
    reduce,
)

__all__ = [
    "UPLOAD_FAILED",
    "UPLOAD_IN_PROGRESS",
    "UPLOAD_SUCCEEDED",
    "AppState",
    "DeletionFinished",
    "DocumentsLoadFailed",
    "DocumentsLoaded",
    "Event",
    "FilesSelected",
    "ModelsLoadFailed",
    "ModelsLoaded",
    "Notice",
    "NoticeRaised",
    "QueryFinished",
    "QueryInputChanged",
    "QueryStarted",
    "SelectionChanged",
    "SelectionField",
    "StateStore",
    "UploadFinished",
    "UploadStarted",
    "reduce",
]
