"""Pydantic models for backend payloads and console domain objects.

Models:
    - Document / DocumentMetadata: documents listed by the backend
    - ModelDescriptor: models offered by the backend
    - ChatTurn: one entry of the chat history
    - DocType / ChatMode: enumerated selections
    - IngestRequest / QueryRequest / DocumentListResponse: wire payloads
"""

from rag_console.models.schemas import (
    UNKNOWN_DOC_TYPE,
    ChatMode,
    ChatTurn,
    DocType,
    Document,
    DocumentListResponse,
    DocumentMetadata,
    IngestRequest,
    ModelDescriptor,
    QueryRequest,
)

__all__ = [
    "UNKNOWN_DOC_TYPE",
    "ChatMode",
    "ChatTurn",
    "DocType",
    "Document",
    "DocumentListResponse",
    "DocumentMetadata",
    "IngestRequest",
    "ModelDescriptor",
    "QueryRequest",
]
