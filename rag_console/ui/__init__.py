"""NiceGUI interface - thin presentation layer for the RAG console.

Responsibilities:
    - Document type and model selectors, multi-file upload
    - Document list with confirmed deletion
    - Chat mode selector, question input and Q&A history

Holds no authoritative state. Renders StateStore snapshots and forwards
user intents to the InteractionController.
"""
