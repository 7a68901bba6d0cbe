"""HTTP client for the RAG backend.

One method per backend capability. Every call is a single request/response
exchange: no retries, no state kept between calls. Failures surface as
TransportError (network) or ProtocolError (status or payload).
"""

import json
import logging
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError as PydanticValidationError

from rag_console.client.config import ClientConfig, get_client_config
from rag_console.client.errors import ProtocolError, TransportError
from rag_console.models.schemas import (
    ChatMode,
    DocType,
    Document,
    DocumentListResponse,
    IngestRequest,
    ModelDescriptor,
    QueryRequest,
)

logger = logging.getLogger(__name__)

NO_ANSWER_FALLBACK = "No answer available."


class RagServiceClient:
    """Typed wrapper around the RAG backend HTTP API.

    Each operation opens its own httpx.AsyncClient, so instances can be
    shared freely between workflows.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            transport: Optional httpx transport (used to drive an
                       in-process backend in tests).
        """
        self._config = config or get_client_config()
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one request and check its status before anything reads the body.

        Raises:
            TransportError: If the backend is unreachable or the request aborts.
            ProtocolError: If the response status is not 2xx.
        """
        logger.debug(f"{method} {self._config.base_url}{path}")
        async with httpx.AsyncClient(
            base_url=self._config.base_url,
            timeout=httpx.Timeout(self._config.request_timeout),
            transport=self._transport,
        ) as client:
            try:
                response = await client.request(method, path, json=json)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                raise ProtocolError(
                    f"API responded with status {status_code}",
                    status_code=status_code,
                ) from e
            except httpx.RequestError as e:
                raise TransportError(f"Connection failed: {e}") from e
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        """Parse a JSON response body.

        Raises:
            ProtocolError: If the body is not valid JSON.
        """
        try:
            return response.json()
        except ValueError as e:
            raise ProtocolError(
                "API returned a body that is not valid JSON",
                status_code=response.status_code,
            ) from e

    async def list_documents(self) -> list[Document]:
        """Fetch every document known to the backend.

        Returns:
            Documents in backend order.

        Raises:
            TransportError: On network failure.
            ProtocolError: On a non-2xx status or an unexpected payload shape.
        """
        response = await self._request("GET", "/documents")
        payload = self._json(response)
        try:
            return DocumentListResponse.model_validate(payload).documents
        except PydanticValidationError as e:
            raise ProtocolError(
                f"Unexpected documents payload: {e.error_count()} invalid field(s)",
                status_code=response.status_code,
            ) from e

    async def list_models(self) -> list[ModelDescriptor]:
        """Fetch the models the backend offers.

        A body that is not a JSON object, or whose ``models`` field is
        missing or not a list, yields an empty list instead of an error.

        Raises:
            TransportError: On network failure.
            ProtocolError: On a non-2xx status, invalid JSON or malformed
                model entries.
        """
        response = await self._request("GET", "/models")
        payload = self._json(response)
        raw_models = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(raw_models, list):
            logger.warning(
                f"Models payload has no list under 'models' "
                f"(got {type(raw_models).__name__}), treating as empty"
            )
            return []

        try:
            return [ModelDescriptor.model_validate(item) for item in raw_models]
        except PydanticValidationError as e:
            raise ProtocolError(
                f"Unexpected model entry: {e.error_count()} invalid field(s)",
                status_code=response.status_code,
            ) from e

    async def ingest_document(self, content: str, doc_type: DocType) -> None:
        """Submit one file's text content for ingestion.

        Args:
            content: Decoded text content of the file.
            doc_type: Type the document is filed under.
        """
        body = IngestRequest(content=content, doc_type=doc_type)
        await self._request("POST", "/process", json=body.model_dump(mode="json"))

    async def delete_document(self, doc_id: str) -> None:
        """Delete a document by its server-assigned id."""
        await self._request("DELETE", f"/documents/{quote(doc_id, safe='')}")

    async def submit_query(self, question: str, mode: ChatMode) -> str:
        """Ask a question on the route selected by ``mode``.

        Args:
            question: The user's question.
            mode: ChatMode.DUT for /query/dut, ChatMode.FULL for /query/full.

        Returns:
            The answer text, or NO_ANSWER_FALLBACK when the result is
            missing or falsy. Structured results are returned as JSON text.

        Raises:
            TransportError: On network failure.
            ProtocolError: On a non-2xx status or a non-object body.
        """
        body = QueryRequest(question=question)
        response = await self._request(
            "POST", f"/query/{mode.value}", json=body.model_dump()
        )
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise ProtocolError(
                "Unexpected query payload: expected a JSON object",
                status_code=response.status_code,
            )

        result = payload.get("result")
        if not result:
            logger.info(f"Query on /query/{mode.value} returned no result")
            return NO_ANSWER_FALLBACK
        if isinstance(result, str):
            return result
        return json.dumps(result, ensure_ascii=False)
