"""
Shared type definitions for the Anki MCP server.

This module describes the JSON shapes exchanged with AnkiConnect, so the
connector and the tool table agree on them.
"""

from typing import Any, Dict, List, Optional, TypedDict


class AnkiRequest(TypedDict, total=False):
    """Request body posted to AnkiConnect.

    Attributes:
        action: Name of the AnkiConnect action (e.g. ``deckNames``)
        version: AnkiConnect protocol version, always 6
        params: Action parameters, ``{}`` when the action takes none
        key: API key, only present when one is configured
    """

    action: str
    version: int
    params: Dict[str, Any]
    key: str


class AnkiResponse(TypedDict):
    """Response body returned by AnkiConnect.

    Exactly one of the two is meaningful: ``error`` is a message when the
    action failed and ``None`` otherwise.
    """

    result: Any
    error: Optional[str]


class NoteData(TypedDict, total=False):
    """Note passed to the ``addNote`` action."""

    deckName: str
    modelName: str
    fields: Dict[str, str]
    tags: List[str]
