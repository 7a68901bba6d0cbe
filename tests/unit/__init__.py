"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - state/: reducer transitions and store notifications
    - models/: Pydantic decoding of backend payloads
    - client/: configuration and file decoding

Uses mocks for the backend client when needed.
"""
