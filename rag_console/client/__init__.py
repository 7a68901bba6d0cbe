"""Remote service client for the RAG backend.

Stateless typed wrappers around the backend HTTP API.

Responsibilities:
    - Request construction for each backend capability
    - HTTP status validation before body parsing
    - Response decoding, with an explicit fallback for malformed model lists
    - Mapping httpx failures onto the console's error taxonomy

Holds no data across calls.
"""

from rag_console.client.config import ClientConfig, get_client_config
from rag_console.client.errors import (
    ProtocolError,
    RagConsoleError,
    TransportError,
    ValidationError,
)
from rag_console.client.files import BufferedFile, PendingFile
from rag_console.client.service import NO_ANSWER_FALLBACK, RagServiceClient

__all__ = [
    "NO_ANSWER_FALLBACK",
    "BufferedFile",
    "ClientConfig",
    "PendingFile",
    "ProtocolError",
    "RagConsoleError",
    "RagServiceClient",
    "TransportError",
    "ValidationError",
    "get_client_config",
]
