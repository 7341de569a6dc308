"""
Tool Registry
-------------
JSON schema-validated tool definitions.

The schema is the only gate between the caller and a handler: a call
whose arguments fail validation never reaches script construction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple
import logging
import math


class PermissionLevel(str, Enum):
    """What a tool does to the document."""
    READ = "read"           # No side effects
    WRITE = "write"         # Modifies or creates documents


class ParameterType(str, Enum):
    """Supported parameter types."""
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


@dataclass
class ToolResult:
    """
    Outcome of a tool call.

    Exactly one of `message` (success) or `error` (failure) is set.
    """
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def ok(cls, message: str = "") -> "ToolResult":
        return cls(success=True, message=message)

    @classmethod
    def fail(cls, error: str) -> "ToolResult":
        return cls(success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        if self.success:
            return {"success": True, "message": self.message}
        return {"success": False, "error": self.error}

    def __repr__(self) -> str:
        status = "✓" if self.success else "✗"
        return f"ToolResult({status} {self.message if self.success else self.error})"


ToolHandler = Callable[[Dict[str, Any]], Awaitable[ToolResult]]


@dataclass
class ToolParameter:
    """Definition of a tool parameter."""
    name: str
    type: ParameterType
    description: str
    required: bool = True
    enum: Optional[Tuple[Any, ...]] = None  # Allowed values
    min_value: Optional[float] = None
    exclusive_min: bool = False

    def to_json_schema(self) -> Dict:
        """Convert to JSON Schema format."""
        schema = {
            "type": self.type.value,
            "description": self.description
        }

        if self.enum:
            schema["enum"] = list(self.enum)
        if self.min_value is not None:
            key = "exclusiveMinimum" if self.exclusive_min else "minimum"
            schema[key] = self.min_value

        return schema


@dataclass
class ToolSchema:
    """JSON Schema for tool parameters."""
    parameters: List[ToolParameter] = field(default_factory=list)

    def to_json_schema(self) -> Dict:
        """Convert to full JSON Schema."""
        properties = {}
        required = []

        for param in self.parameters:
            properties[param.name] = param.to_json_schema()
            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
            "additionalProperties": False
        }

    def to_openai_function(self, name: str, description: str) -> Dict:
        """Convert to OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": name,
                "description": description,
                "parameters": self.to_json_schema()
            }
        }


@dataclass(frozen=True)
class Tool:
    """
    Tool definition with schema and handler.

    The handler receives arguments that already passed validate_args and
    must return a ToolResult instead of raising.
    """
    name: str
    description: str
    schema: ToolSchema
    handler: ToolHandler
    permission: PermissionLevel = PermissionLevel.WRITE
    category: str = "pages"

    def validate_args(self, args: Dict[str, Any]) -> tuple[bool, Optional[str]]:
        """
        Validate arguments against schema.
        Returns (is_valid, error_message).
        """
        if not isinstance(args, dict):
            return False, "Arguments must be an object"

        known_params = {p.name for p in self.schema.parameters}
        for arg_name in args:
            if arg_name not in known_params:
                return False, f"Unknown parameter: {arg_name}"

        for param in self.schema.parameters:
            if param.name not in args or args[param.name] is None:
                if param.required:
                    return False, f"Missing required parameter: {param.name}"
                continue

            value = args[param.name]

            if not self._validate_type(value, param.type):
                return False, f"Invalid type for {param.name}: expected {param.type.value}"

            if param.enum and value not in param.enum:
                return False, f"Invalid value for {param.name}: must be one of {param.enum}"

            if param.type in (ParameterType.INTEGER, ParameterType.NUMBER):
                if param.min_value is not None:
                    if param.exclusive_min and value <= param.min_value:
                        return False, f"{param.name} must be > {param.min_value}"
                    if not param.exclusive_min and value < param.min_value:
                        return False, f"{param.name} must be >= {param.min_value}"

        return True, None

    def _validate_type(self, value: Any, expected: ParameterType) -> bool:
        """
        Validate value type. bool is rejected where a number is expected,
        and so are NaN and the infinities.
        """
        if expected == ParameterType.BOOLEAN:
            return isinstance(value, bool)
        if isinstance(value, bool):
            return False
        if isinstance(value, float) and not math.isfinite(value):
            return False
        type_map = {
            ParameterType.STRING: str,
            ParameterType.INTEGER: int,
            ParameterType.NUMBER: (int, float),
        }
        return isinstance(value, type_map.get(expected, object))

    def to_definition(self) -> Dict[str, Any]:
        """Name, description and parameter schema for a hosting framework."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.schema.to_json_schema()
        }

    def __repr__(self) -> str:
        return f"Tool(name={self.name}, permission={self.permission.value})"


class ToolRegistry:
    """
    Ordered registry of tools.

    Names are unique: registering a second tool under an existing name
    is an error.
    """

    def __init__(self):
        self._tools: Dict[str, Tool] = {}
        self._logger = logging.getLogger("pages.tools.registry")

    def register(self, tool: Tool) -> None:
        """Register a tool."""
        if tool.name in self._tools:
            raise ValueError(f"Tool already registered: {tool.name}")

        self._tools[tool.name] = tool
        self._logger.debug(f"Registered tool: {tool.name} ({tool.permission.value})")

    def get(self, name: str) -> Optional[Tool]:
        """Get a tool by name."""
        return self._tools.get(name)

    def list_tools(self) -> List[Tool]:
        """List all registered tools in registration order."""
        return list(self._tools.values())

    def get_definitions(self) -> List[Dict[str, Any]]:
        """Get all tool definitions for a hosting framework."""
        return [tool.to_definition() for tool in self._tools.values()]

    def get_schemas_for_llm(self) -> List[Dict]:
        """Get all tool schemas in OpenAI function format."""
        return [
            tool.schema.to_openai_function(tool.name, tool.description)
            for tool in self._tools.values()
        ]

    def validate_tool_call(
        self,
        tool_name: str,
        args: Dict[str, Any]
    ) -> tuple[bool, Optional[str]]:
        """
        Validate a tool call.
        Returns (is_valid, error_message).
        """
        tool = self.get(tool_name)

        if tool is None:
            return False, f"Unknown tool: {tool_name}"

        return tool.validate_args(args)

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools
