"""
Tests for the prompt tools and ToolRegistry.dispatch.
"""

import pytest

from prompt_engine.storage import InMemoryPromptStore
from prompt_engine.tools import (
    GetStatsTool,
    ProcessPromptTool,
    ToolRegistry,
    ToolResult,
    create_tool_registry,
)

TOOL_NAMES = [
    "process_prompt",
    "evaluate_prompt",
    "validate_prompt",
    "compare_prompts",
    "save_prompt",
    "search_prompts",
    "get_prompt",
    "get_stats",
]


class TestToolResult:

    def test_ok(self):
        result = ToolResult(output='{"a": 1}')

        assert result.ok
        assert bool(result)
        assert result.json_output() == {"a": 1}

    def test_error(self):
        result = ToolResult(error="boom")

        assert not result.ok
        assert str(result) == "Error: boom"
        assert result.json_output() is None


class TestToolRegistry:

    def setup_method(self):
        self.store = InMemoryPromptStore()

    @pytest.fixture
    def registry(self, engine):
        return create_tool_registry(engine, self.store)

    def test_every_tool_registered(self, registry):
        assert [tool.name for tool in registry.list_tools()] == TOOL_NAMES

    def test_llm_schema(self, registry):
        schema = registry.to_llm_schema()

        assert len(schema) == 8
        assert schema[0]["type"] == "function"
        assert schema[0]["function"]["name"] == "process_prompt"
        assert schema[0]["function"]["parameters"]["required"] == ["raw"]
        assert "sql" in schema[0]["function"]["parameters"]["properties"]["domain"]["enum"]

    def test_llm_schema_subset(self, registry):
        schema = registry.to_llm_schema(["get_stats", "missing"])

        assert [entry["function"]["name"] for entry in schema] == ["get_stats"]

    def test_tools_do_not_serialize_dependencies(self, engine):
        data = ProcessPromptTool(engine=engine).model_dump()

        assert "engine" not in data
        assert data["name"] == "process_prompt"

    def test_register_and_clear(self):
        registry = ToolRegistry()
        registry.register(GetStatsTool(store=self.store))

        assert registry.get("get_stats") is not None

        registry.clear()

        assert registry.list_tools() == []

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry):
        result = await registry.dispatch("delete_everything", {})

        assert result.error == "Unknown tool: delete_everything"

    @pytest.mark.asyncio
    async def test_arguments_must_be_an_object(self, registry):
        result = await registry.dispatch("process_prompt", ["create a login form"])

        assert not result.ok

    @pytest.mark.asyncio
    async def test_unexpected_argument(self, registry):
        result = await registry.dispatch("process_prompt", {"raw": "create a login form", "colour": "blue"})

        assert result.error.startswith("Invalid arguments for process_prompt")

    @pytest.mark.asyncio
    async def test_missing_argument(self, registry):
        result = await registry.dispatch("process_prompt", {})

        assert result.error.startswith("Invalid arguments for process_prompt")

    @pytest.mark.asyncio
    async def test_errors_inside_a_tool_are_not_argument_errors(self, registry):
        result = await registry.dispatch("search_prompts", {"min_score": "0.5"})

        assert result.error == "Invalid min_score: must be a number, got '0.5'"

    @pytest.mark.asyncio
    async def test_internal_type_error_propagates(self, registry, monkeypatch):
        def broken(*args, **kwargs):
            raise TypeError("unsupported operand")

        monkeypatch.setattr(self.store, "stats", broken)

        with pytest.raises(TypeError, match="unsupported operand"):
            await registry.dispatch("get_stats")

    @pytest.mark.asyncio
    async def test_process(self, registry):
        result = await registry.dispatch("process_prompt", {"raw": "make a sql query to get users"})

        data = result.json_output()
        assert data["domain"] == "sql"
        assert data["template"] == "chain-of-thought"
        assert "Task: Write a SQL query to get users." in data["refined"]

    @pytest.mark.asyncio
    async def test_process_invalid_tone(self, registry):
        result = await registry.dispatch("process_prompt", {"raw": "create a login form", "tone": "sarcastic"})

        assert not result.ok
        assert "tone" in result.error

    @pytest.mark.asyncio
    async def test_evaluate(self, registry, engine):
        refined = engine.refine("create a login form", "general", "basic")

        result = await registry.dispatch("evaluate_prompt", {"prompt": refined, "domain": "general"})

        data = result.json_output()
        assert data["domain"] == "general"
        assert data["score"]["overall"] == pytest.approx(0.6475)
        assert data["completeness"]["missing"] == ["constraints", "success"]

    @pytest.mark.asyncio
    async def test_evaluate_classifies_when_no_domain(self, registry):
        result = await registry.dispatch("evaluate_prompt", {"prompt": "Write a SQL query with a join."})

        assert result.json_output()["domain"] == "sql"

    @pytest.mark.asyncio
    async def test_evaluate_invalid_domain(self, registry):
        result = await registry.dispatch("evaluate_prompt", {"prompt": "Write it.", "domain": "astrology"})

        assert not result.ok
        assert "domain" in result.error

    @pytest.mark.asyncio
    async def test_evaluate_non_string(self, registry):
        result = await registry.dispatch("evaluate_prompt", {"prompt": 42})

        assert not result.ok

    @pytest.mark.asyncio
    async def test_validate(self, registry):
        empty = (await registry.dispatch("validate_prompt", {"prompt": "", "domain": "general"})).json_output()
        vague = (await registry.dispatch("validate_prompt", {"prompt": "do it"})).json_output()

        assert empty["valid"] is False
        assert [f["code"] for f in empty["findings"]] == ["EMPTY_PROMPT"]
        assert vague["domain"] == "general"
        assert vague["findings"]

    @pytest.mark.asyncio
    async def test_compare(self, registry):
        result = await registry.dispatch(
            "compare_prompts",
            {
                "variants": [
                    "Build a user dashboard",
                    "Create a comprehensive user management dashboard with authentication, "
                    "role management, and activity tracking",
                ]
            },
        )

        assert result.json_output()["winner_index"] == 1

    @pytest.mark.asyncio
    async def test_compare_empty(self, registry):
        result = await registry.dispatch("compare_prompts", {"variants": []})

        assert "variants" in result.error

    @pytest.mark.asyncio
    async def test_library_flow(self, registry):
        saved = (await registry.dispatch(
            "save_prompt",
            {"prompt": "make a sql query to get users", "description": "Users", "tags": ["DB"], "is_public": True},
        )).json_output()

        assert saved["record"]["domain"] == "sql"
        assert saved["record"]["tags"] == ["db"]
        assert saved["record"]["metadata"]["description"] == "Users"
        assert saved["record"]["usage_count"] == 0

        fetched = (await registry.dispatch("get_prompt", {"id": saved["id"]})).json_output()
        assert fetched["usage_count"] == 1
        assert fetched["refined"] == saved["record"]["refined"]

        found = (await registry.dispatch("search_prompts", {"query": "sql", "tags": ["db"]})).json_output()
        assert found["count"] == 1
        assert found["results"][0]["id"] == saved["id"]

        stats = (await registry.dispatch("get_stats")).json_output()
        assert stats["total"] == 1
        assert stats["public"] == 1
        assert list(stats["by_domain"]) == ["sql"]

    @pytest.mark.asyncio
    async def test_get_unknown(self, registry):
        result = await registry.dispatch("get_prompt", {"id": "missing"})

        assert result.error == "Prompt not found: missing"

    @pytest.mark.asyncio
    async def test_search_invalid_domain(self, registry):
        result = await registry.dispatch("search_prompts", {"domain": "astrology"})

        assert not result.ok

    @pytest.mark.asyncio
    async def test_search_empty_library(self, registry):
        result = await registry.dispatch("search_prompts", {})

        assert result.json_output() == {"count": 0, "results": []}
