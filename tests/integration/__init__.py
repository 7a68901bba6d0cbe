"""Integration tests for components working together as a system.

Coverage:
    - RagServiceClient against the fake backend over ASGI transport
    - Transport failures through httpx.MockTransport
    - Upload, deletion and query workflows through the controller

The fake backend runs in-process; no external services are required.
"""
