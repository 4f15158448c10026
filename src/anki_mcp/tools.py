"""
Tool table for the Anki MCP server.

Each ``AnkiTool`` ties an advertised MCP tool to the single AnkiConnect
action that backs it. ``list_tools`` and ``call_tool`` both read from the
same table, so a tool cannot be advertised without being callable.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping

import mcp.types as types

from .anki_connector import AnkiConnector
from .types import NoteData

logger = logging.getLogger(__name__)


class UnknownToolError(ValueError):
    """Raised when a tool name is not in the registry."""

    pass


def _no_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    return {}


def _note_params(arguments: Dict[str, Any]) -> Dict[str, Any]:
    note: NoteData = {
        "deckName": arguments.get("deckName"),
        "modelName": arguments.get("modelName"),
        "fields": arguments.get("fields"),
        "tags": arguments.get("tags") or [],
    }
    return {"note": note}


def _names(label: str) -> Callable[[Any, Dict[str, Any]], str]:
    def format_names(result: Any, arguments: Dict[str, Any]) -> str:
        return f"{label}: {', '.join(result or [])}"

    return format_names


def _created_note(result: Any, arguments: Dict[str, Any]) -> str:
    return f"Created note {result} in deck '{arguments.get('deckName')}'"


@dataclass(frozen=True)
class AnkiTool:
    """An MCP tool backed by exactly one AnkiConnect action.

    Attributes:
        name: Tool name advertised to the client
        description: Human-readable description
        action: AnkiConnect action the tool invokes
        build_params: Maps the tool arguments to the action params
        format_result: Turns the action result into the response text
        input_schema: JSON schema of the accepted arguments
    """

    name: str
    description: str
    action: str
    build_params: Callable[[Dict[str, Any]], Dict[str, Any]]
    format_result: Callable[[Any, Dict[str, Any]], str]
    input_schema: Dict[str, Any] = field(
        default_factory=lambda: {"type": "object", "properties": {}}
    )

    def descriptor(self) -> types.Tool:
        return types.Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def build_registry(tools: Iterable[AnkiTool]) -> Mapping[str, AnkiTool]:
    """Index tools by name, keeping their order.

    Raises:
        ValueError: Two tools share a name.
    """
    registry: Dict[str, AnkiTool] = {}
    for tool in tools:
        if tool.name in registry:
            raise ValueError(f"Duplicate tool name: {tool.name}")
        registry[tool.name] = tool
    return MappingProxyType(registry)


DEFAULT_TOOLS = build_registry(
    [
        AnkiTool(
            name="list_decks",
            description="List the names of all decks in Anki",
            action="deckNames",
            build_params=_no_params,
            format_result=_names("Decks"),
        ),
        AnkiTool(
            name="list_models",
            description="List the names of all note types (models) in Anki",
            action="modelNames",
            build_params=_no_params,
            format_result=_names("Models"),
        ),
        AnkiTool(
            name="create_note",
            description="Create a note in a deck",
            action="addNote",
            build_params=_note_params,
            format_result=_created_note,
            input_schema={
                "type": "object",
                "properties": {
                    "deckName": {
                        "type": "string",
                        "description": "Name of the deck to add note to",
                    },
                    "modelName": {
                        "type": "string",
                        "description": "Name of the note model/type to use",
                    },
                    "fields": {
                        "type": "object",
                        "description": "Field values for the note model being used",
                    },
                    "tags": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "Tags to apply to the note",
                    },
                },
                "required": ["deckName", "modelName", "fields"],
            },
        ),
    ]
)


def list_tools(registry: Mapping[str, AnkiTool] = DEFAULT_TOOLS) -> List[types.Tool]:
    """List available tools."""
    return [tool.descriptor() for tool in registry.values()]


def call_tool(
    name: str,
    arguments: Dict[str, Any],
    connector: AnkiConnector,
    registry: Mapping[str, AnkiTool] = DEFAULT_TOOLS,
) -> List[types.TextContent]:
    """Run one tool invocation as a single AnkiConnect request.

    Errors from the connector propagate unchanged so the MCP server can
    report them as a failed tool call.
    """
    tool = registry.get(name)
    if tool is None:
        raise UnknownToolError(f"Unknown tool: {name}")

    arguments = arguments or {}
    logger.debug("Calling tool %s -> %s", name, tool.action)
    result = connector.invoke(tool.action, tool.build_params(arguments))

    return [types.TextContent(type="text", text=tool.format_result(result, arguments))]
