"""
Tool Executor Tests
-------------------
Dispatch by name: validation gate, handler errors, call context.
"""

import logging

from infra.logging import get_call_id
from tools import ToolExecutor
from tools.registry import Tool, ToolRegistry, ToolResult, ToolSchema


class TestToolExecutor:

    def test_dispatches_valid_call(self, run, registry, fake_executor):
        executor = ToolExecutor(registry)

        result = run(executor.execute("insert_paragraph", {"text": "x", "position": "after 3"}))

        assert result.success
        assert len(fake_executor.calls) == 1
        assert "after paragraph 3" in fake_executor.last_script

    def test_unknown_tool(self, run, registry, fake_executor):
        result = run(ToolExecutor(registry).execute("erase_disk", {}))

        assert not result.success
        assert result.error == "Unknown tool: erase_disk"
        assert fake_executor.calls == []

    def test_schema_violation_skips_handler(self, run, registry, fake_executor):
        result = run(ToolExecutor(registry).execute("insert_text", {"text": 42}))

        assert not result.success
        assert "Invalid type for text" in result.error
        assert fake_executor.calls == []

    def test_non_finite_font_size_skips_handler(self, run, registry, fake_executor):
        result = run(ToolExecutor(registry).execute(
            "format_paragraph", {"paragraph": 1, "fontSize": float("nan")}
        ))

        assert not result.success
        assert fake_executor.calls == []

    def test_alignment_outside_catalog_after_schema_edit(self, run, registry, fake_executor):
        for definition in registry.get_definitions():
            alignment = definition["parameters"]["properties"].get("alignment")
            if alignment:
                alignment["enum"].append("sideways")

        result = run(ToolExecutor(registry).execute(
            "format_paragraph", {"paragraph": 1, "alignment": "sideways"}
        ))

        assert not result.success
        assert fake_executor.calls == []

    def test_missing_args_defaults_to_empty(self, run, registry, fake_executor):
        fake_executor.output = "body"
        result = run(ToolExecutor(registry).execute("get_document_text"))
        assert result.success
        assert result.message == "body"

    def test_handler_exception_becomes_failure(self, run):
        async def explode(args):
            raise RuntimeError("handler bug")

        registry = ToolRegistry()
        registry.register(Tool(
            name="explode",
            description="Always raises",
            schema=ToolSchema(),
            handler=explode,
        ))

        result = run(ToolExecutor(registry).execute("explode", {}))

        assert not result.success
        assert result.error == "handler bug"

    def test_call_id_visible_to_handler(self, run):
        seen = []

        async def record(args):
            seen.append(get_call_id())
            return ToolResult.ok()

        registry = ToolRegistry()
        registry.register(Tool(
            name="record",
            description="Records the call id",
            schema=ToolSchema(),
            handler=record,
        ))

        run(ToolExecutor(registry).execute("record", {}, call_id="call_test"))

        assert seen == ["call_test"]
        assert get_call_id() is None

    def test_logs_execution(self, run, registry, caplog):
        with caplog.at_level(logging.INFO, logger="pages.tools.executor"):
            run(ToolExecutor(registry).execute("insert_text", {"text": "x"}))
        assert "Executed insert_text: success" in caplog.text
