"""
Pages Tools
-----------
Tool definitions that edit Apple Pages documents through AppleScript.

Each handler:
1. destructures its arguments into a parameter dataclass
2. builds a script with ScriptBuilder (all strings sanitized)
3. runs it through the injected ScriptExecutor
4. returns a ToolResult, never raising

Document 1 is always the frontmost document.
"""

from dataclasses import dataclass
from functools import wraps
from typing import Any, Dict, List, Optional
import logging
import re

from core.errors import ParameterError, classify_exception, log_level_for
from scripting import (
    DEFAULT_INTERPRETER,
    ScriptBuilder,
    ScriptExecutor,
    boolean_literal,
    number_literal,
    property_record,
    run_applescript,
    string_literal,
    with_properties,
)

from .registry import (
    ParameterType,
    PermissionLevel,
    Tool,
    ToolParameter,
    ToolResult,
    ToolSchema,
)


NO_DOCUMENT_SENTINEL = "No document open"

ALIGNMENTS = ("left", "center", "right", "justify")

_AFTER_PATTERN = re.compile(r"after\s+(\d+)")


# Parameter structs

@dataclass(frozen=True)
class TextParams:
    """Arguments of insert_text and append_text."""
    text: str

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "TextParams":
        return cls(text=args["text"])


@dataclass(frozen=True)
class CreateDocumentParams:
    """
    Arguments of create_document.

    Empty strings count as absent: no template property and no initial
    text are sent for them.
    """
    text: Optional[str] = None
    template: Optional[str] = None

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "CreateDocumentParams":
        return cls(
            text=args.get("text") or None,
            template=args.get("template") or None,
        )


@dataclass(frozen=True)
class ParagraphFormat:
    """Arguments of format_paragraph. Every style field is optional."""
    paragraph: int
    alignment: Optional[str] = None
    font_size: Optional[float] = None
    font_name: Optional[str] = None
    bold: Optional[bool] = None
    italic: Optional[bool] = None

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "ParagraphFormat":
        return cls(
            paragraph=args["paragraph"],
            alignment=args.get("alignment"),
            font_size=args.get("fontSize"),
            font_name=args.get("fontName"),
            bold=args.get("bold"),
            italic=args.get("italic"),
        )

    def properties(self) -> List[tuple]:
        """(key, rendered value) pairs for the fields that are set."""
        pairs = []
        if self.alignment is not None:
            pairs.append(("alignment", string_literal(self.alignment)))
        if self.font_size is not None:
            pairs.append(("font size", number_literal(self.font_size)))
        if self.font_name is not None:
            pairs.append(("font", string_literal(self.font_name)))
        if self.bold is not None:
            pairs.append(("bold", boolean_literal(self.bold)))
        if self.italic is not None:
            pairs.append(("italic", boolean_literal(self.italic)))
        return pairs


@dataclass(frozen=True)
class ParagraphInsert:
    """Arguments of insert_paragraph."""
    text: str
    position: str

    @classmethod
    def from_args(cls, args: Dict[str, Any]) -> "ParagraphInsert":
        return cls(text=args["text"], position=args["position"])

    def location(self) -> str:
        """
        AppleScript location clause for the position.

        Accepts 'beginning', 'end' or 'after <n>' with n >= 1.
        Raises ParameterError for anything else.
        """
        position = self.position.strip()
        if position in ("beginning", "end"):
            return f"at {position}"

        match = _AFTER_PATTERN.fullmatch(position)
        if match is None:
            raise ParameterError(
                'Invalid position. Use "beginning", "end" or "after <n>"',
                field="position"
            )

        index = int(match.group(1))
        if index < 1:
            raise ParameterError(
                "Paragraph numbers start at 1",
                field="position"
            )
        return f"after paragraph {index}"


def tool_handler(method):
    """Turn anything a handler raises into a failed ToolResult."""
    @wraps(method)
    async def wrapper(self, args: Dict[str, Any]) -> ToolResult:
        try:
            return await method(self, args)
        except Exception as e:
            return self.failure(method.__name__, e)
    return wrapper


class PagesTools:
    """
    Handlers for the Pages tool set.

    The executor is injected so handlers can be tested with a fake.
    """

    def __init__(
        self,
        executor: ScriptExecutor,
        application: str = "Pages",
        interpreter: str = DEFAULT_INTERPRETER
    ):
        self._executor = executor
        self._application = application
        self._interpreter = interpreter
        self._logger = logging.getLogger("pages.tools.pages")

    def _builder(self) -> ScriptBuilder:
        return ScriptBuilder(self._application)

    async def _run(self, tool_name: str, script: str, default_message: str = "") -> ToolResult:
        """Run a script and wrap its output."""
        self._logger.debug(f"{tool_name}: running script ({len(script)} chars)")
        output = await run_applescript(self._executor, script, self._interpreter)
        return ToolResult.ok(output or default_message)

    def failure(self, tool_name: str, exc: Exception) -> ToolResult:
        """Log exc at the level of its category and wrap it as a failure."""
        category = classify_exception(exc)
        self._logger.log(
            log_level_for(category),
            f"{tool_name} failed ({category.name}): {exc}"
        )
        return ToolResult.fail(str(exc))

    # Handlers

    @tool_handler
    async def insert_text(self, args: Dict[str, Any]) -> ToolResult:
        """Replace the whole body text of the frontmost document."""
        params = TextParams.from_args(args)
        script = (
            self._builder()
            .ensure_document()
            .tell_document(f"set body text to {string_literal(params.text)}")
            .build()
        )
        return await self._run("insert_text", script, "Text inserted")

    @tool_handler
    async def append_text(self, args: Dict[str, Any]) -> ToolResult:
        """Read the body text, then write it back with the new text appended."""
        params = TextParams.from_args(args)
        script = (
            self._builder()
            .ensure_document()
            .tell_document(
                "set currentText to body text",
                f"set body text to currentText & {string_literal(params.text)}",
            )
            .build()
        )
        return await self._run("append_text", script, "Text appended")

    @tool_handler
    async def create_document(self, args: Dict[str, Any]) -> ToolResult:
        params = CreateDocumentParams.from_args(args)

        record = ""
        if params.template is not None:
            record = property_record([("template", string_literal(params.template))])

        builder = self._builder().statement(
            f"set newDoc to make new document{with_properties(record)}"
        )
        if params.text is not None:
            builder.tell("newDoc", f"set body text to {string_literal(params.text)}")

        return await self._run("create_document", builder.build(), "Document created")

    @tool_handler
    async def format_paragraph(self, args: Dict[str, Any]) -> ToolResult:
        """
        Apply the given style fields to one paragraph.

        A call with no style fields is rejected without running anything.
        """
        params = ParagraphFormat.from_args(args)
        record = property_record(params.properties())
        if not record:
            raise ParameterError("No formatting properties given")

        script = (
            self._builder()
            .require_document(NO_DOCUMENT_SENTINEL)
            .tell_document(
                f"set properties of paragraph {int(params.paragraph)} to {record}"
            )
            .build()
        )
        return await self._run(
            "format_paragraph", script, f"Paragraph {params.paragraph} formatted"
        )

    @tool_handler
    async def insert_paragraph(self, args: Dict[str, Any]) -> ToolResult:
        params = ParagraphInsert.from_args(args)
        location = params.location()

        script = (
            self._builder()
            .ensure_document()
            .tell_document(
                f"make new paragraph {location} with data {string_literal(params.text)}"
            )
            .build()
        )
        return await self._run("insert_paragraph", script, "Paragraph inserted")

    @tool_handler
    async def get_document_text(self, args: Dict[str, Any]) -> ToolResult:
        """Return the body text, or the no-document sentinel."""
        script = (
            self._builder()
            .return_if_no_document(NO_DOCUMENT_SENTINEL)
            .tell_document("return body text")
            .build()
        )
        return await self._run("get_document_text", script)


def build_pages_tools(
    executor: ScriptExecutor,
    application: str = "Pages",
    interpreter: str = DEFAULT_INTERPRETER
) -> List[Tool]:
    """Create the Pages tools, in catalog order, bound to executor."""
    handlers = PagesTools(executor, application=application, interpreter=interpreter)

    return [
        Tool(
            name="insert_text",
            description="Replace the entire text of the active Pages document",
            schema=ToolSchema(parameters=[
                ToolParameter(
                    name="text",
                    type=ParameterType.STRING,
                    description="Text to insert (empty clears the document)"
                )
            ]),
            handler=handlers.insert_text,
        ),
        Tool(
            name="append_text",
            description="Append text to the end of the active Pages document",
            schema=ToolSchema(parameters=[
                ToolParameter(
                    name="text",
                    type=ParameterType.STRING,
                    description="Text to append"
                )
            ]),
            handler=handlers.append_text,
        ),
        Tool(
            name="create_document",
            description="Create a new Pages document with optional text and template",
            schema=ToolSchema(parameters=[
                ToolParameter(
                    name="text",
                    type=ParameterType.STRING,
                    description="Initial text for the document",
                    required=False
                ),
                ToolParameter(
                    name="template",
                    type=ParameterType.STRING,
                    description="Name of the template to use",
                    required=False
                ),
            ]),
            handler=handlers.create_document,
        ),
        Tool(
            name="format_paragraph",
            description="Format a paragraph in the active Pages document",
            schema=ToolSchema(parameters=[
                ToolParameter(
                    name="paragraph",
                    type=ParameterType.INTEGER,
                    description="Paragraph number (1-based)",
                    min_value=1
                ),
                ToolParameter(
                    name="alignment",
                    type=ParameterType.STRING,
                    description="Alignment (left, center, right, justify)",
                    required=False,
                    enum=ALIGNMENTS
                ),
                ToolParameter(
                    name="fontSize",
                    type=ParameterType.NUMBER,
                    description="Font size in points",
                    required=False,
                    min_value=0,
                    exclusive_min=True
                ),
                ToolParameter(
                    name="fontName",
                    type=ParameterType.STRING,
                    description="Font name",
                    required=False
                ),
                ToolParameter(
                    name="bold",
                    type=ParameterType.BOOLEAN,
                    description="Bold",
                    required=False
                ),
                ToolParameter(
                    name="italic",
                    type=ParameterType.BOOLEAN,
                    description="Italic",
                    required=False
                ),
            ]),
            handler=handlers.format_paragraph,
        ),
        Tool(
            name="insert_paragraph",
            description="Insert a new paragraph at a given position",
            schema=ToolSchema(parameters=[
                ToolParameter(
                    name="text",
                    type=ParameterType.STRING,
                    description="Paragraph text"
                ),
                ToolParameter(
                    name="position",
                    type=ParameterType.STRING,
                    description="Position: beginning, end, or after <n>"
                ),
            ]),
            handler=handlers.insert_paragraph,
        ),
        Tool(
            name="get_document_text",
            description="Get the text of the active Pages document",
            schema=ToolSchema(parameters=[]),
            handler=handlers.get_document_text,
            permission=PermissionLevel.READ,
        ),
    ]
