"""Test package for RAG Console.

Unit tests cover isolated logic and integration tests cover full workflows.

Structure:
    - unit/: reducer, store, schemas, config and file decoding
    - integration/: backend client and controller workflows
    - fake_backend.py: in-memory FastAPI implementation of the backend API

Integration tests run against the fake backend in-process, no network needed.
Uses pytest with pytest-check for soft assertions.
"""
