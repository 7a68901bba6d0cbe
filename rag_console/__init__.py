"""RAG Console - browser client for a retrieval-augmented-generation backend.

Manages a document corpus and queries it through a remote RAG service.
Combines httpx for backend calls, Pydantic for state and payload validation,
and NiceGUI for the browser interface.

Components:
    - client: stateless typed wrappers around the backend HTTP API
    - state: immutable snapshot, events and reducer
    - controller: upload, deletion and query workflows
    - ui: NiceGUI page rendering the state
    - models: payload and domain schemas
"""

__version__ = "0.1.0"
