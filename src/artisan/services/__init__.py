"""Collaborators used by the state controller.

Modules
-------
storage
    Key/value persistence media (JSON files, memory).
gallery_store
    Ordered, persisted gallery of saved results.
generation
    Generation service contract and the Gemini implementation.
capture
    Capture source contract, scoped capture sessions and file import.
authorization
    Authorization gate contract and implementations.
"""
