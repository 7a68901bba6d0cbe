"""Pydantic models for the RAG backend contract and console state.

Wire payloads are decoded leniently (unknown fields ignored); the enumerated
document types only constrain what the console submits.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_DOC_TYPE = "Unknown"


class DocType(str, Enum):
    """Document types accepted for ingestion."""

    DUT = "DUT"
    DUT_MANUAL = "DUT_MANUAL"
    REPORT = "REPORT"
    OTHER = "OTHER"


class ChatMode(str, Enum):
    """Query route selector.

    DUT restricts retrieval to DUT guidelines, FULL searches every document.
    """

    DUT = "dut"
    FULL = "full"


class DocumentMetadata(BaseModel):
    """Metadata attached to an ingested document.

    Attributes:
        name: Optional human-readable name.
        doc_type: Type string as reported by the backend (may be missing).
    """

    name: str | None = None
    doc_type: str | None = None


class Document(BaseModel):
    """A document known to the backend.

    Attributes:
        id: Opaque server-assigned identifier.
        metadata: Document metadata; empty when the backend omits it.
        name: Legacy top-level name some backends still send.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    metadata: DocumentMetadata = Field(default_factory=DocumentMetadata)
    name: str | None = None

    @field_validator("metadata", mode="before")
    @classmethod
    def default_missing_metadata(cls, v: object) -> object:
        """Treat an explicit null metadata object as empty."""
        return {} if v is None else v

    @property
    def display_name(self) -> str:
        return self.metadata.name or self.name or self.id

    @property
    def doc_type_label(self) -> str:
        return self.metadata.doc_type or UNKNOWN_DOC_TYPE


class ModelDescriptor(BaseModel):
    """A model the backend can answer with."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)


class ChatTurn(BaseModel):
    """One question/answer pair in the chat history."""

    model_config = ConfigDict(frozen=True)

    question: str
    answer: str


class DocumentListResponse(BaseModel):
    """Response body of GET /documents."""

    documents: list[Document]


class IngestRequest(BaseModel):
    """Request body of POST /process.

    Attributes:
        content: Decoded text content of one file.
        doc_type: Type the document is filed under.
    """

    content: str
    doc_type: DocType


class QueryRequest(BaseModel):
    """Request body of POST /query/{mode}."""

    question: str = Field(..., min_length=1)
