"""
Boundary layer for external system integrations.

Handles all interactions with external systems (database, content store,
text extraction, embeddings). Provides adapters and clients for
infrastructure dependencies.
"""
