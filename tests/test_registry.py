import inspect
import json
import logging
from types import ModuleType

import pytest
from cloud_alm_mcp.core.errors import ODataError, ToolFailure
from cloud_alm_mcp.core.registry import (
    discover_tool_modules,
    register_discovered_tools,
)
from mcp.server.fastmcp import FastMCP


class FakeClients:
    label = "fake"


def _make_module(name: str, code: str) -> ModuleType:
    module = ModuleType(name)
    exec(code, module.__dict__)
    return module


def _recording_app():
    app = FastMCP("test")
    registered = []

    def record_tool(name):
        def decorator(fn):
            registered.append((name, fn))
            return fn

        return decorator

    app.tool = record_tool  # type: ignore[attr-defined]
    return app, registered


@pytest.mark.asyncio
async def test_register_discovered_tools_registers_valid_tools_only():
    code = """
async def tool_fn(clients, *, foo:int=1):
    return (clients.label, foo)

async def _private(clients):
    return None

async def wrong_first(arg1, clients):
    return None

def sync_func(clients):
    return None
"""
    mod = _make_module("fake_mod", code)
    app, registered = _recording_app()

    names = register_discovered_tools(app, FakeClients(), modules=[mod])

    assert names == ["tool_fn"]
    assert [n for n, _ in registered] == ["tool_fn"]

    sig = inspect.signature(registered[0][1])
    assert "clients" not in sig.parameters

    result = await registered[0][1](foo=5)
    assert result == ("fake", 5)


def test_register_discovered_tools_duplicate_names_raise():
    mod1 = _make_module("mod1", "async def tool_fn(clients): return None")
    mod2 = _make_module("mod2", "async def tool_fn(clients): return None")

    with pytest.raises(ValueError):
        register_discovered_tools(FastMCP("test"), FakeClients(), modules=[mod1, mod2])


def test_app_without_tool_decorator_rejected():
    with pytest.raises(TypeError):
        register_discovered_tools(object(), FakeClients(), modules=[])


@pytest.mark.asyncio
async def test_client_errors_become_structured_tool_failures(caplog):
    code = """
async def failing(clients):
    raise clients.error
"""
    mod = _make_module("failing_mod", code)
    app, registered = _recording_app()

    class Clients:
        error = ODataError(status_code=404, code="404", message="not found")

    register_discovered_tools(app, lambda: Clients(), modules=[mod])

    with caplog.at_level(logging.INFO, logger="cloud_alm_mcp.observability"):
        with pytest.raises(ToolFailure) as exc:
            await registered[0][1]()

    payload = json.loads(str(exc.value))
    assert payload["kind"] == "odata"
    assert payload["status_code"] == 404
    assert payload["code"] == "404"

    record = next(r for r in caplog.records if r.getMessage() == "tool_call")
    assert record.tool == "failing"
    assert record.status == "error"
    assert record.error_type == "ODataError"


@pytest.mark.asyncio
async def test_non_client_errors_propagate_unchanged():
    mod = _make_module(
        "value_mod", "async def bad_input(clients): raise ValueError('limit')"
    )
    app, registered = _recording_app()
    register_discovered_tools(app, FakeClients(), modules=[mod])

    with pytest.raises(ValueError):
        await registered[0][1]()


def test_discover_tool_modules_skips_import_failures(monkeypatch, caplog):
    import importlib
    import pkgutil

    class Info:
        def __init__(self, name):
            self.name = name

    def fake_iter_modules(path, prefix):
        return [
            Info(prefix + "good"),
            Info(prefix + "bad"),
            Info(prefix + "_private"),
        ]

    good_mod = _make_module(
        "cloud_alm_mcp.tools.good", "async def tool_fn(clients): return None"
    )

    real_import_module = importlib.import_module

    def fake_import_module(name, *args, **kwargs):
        if name == "cloud_alm_mcp.tools.bad":
            raise ImportError("boom")
        if name == "cloud_alm_mcp.tools.good":
            return good_mod
        return real_import_module(name, *args, **kwargs)

    monkeypatch.setattr(pkgutil, "iter_modules", fake_iter_modules)
    monkeypatch.setattr(importlib, "import_module", fake_import_module)

    with caplog.at_level("ERROR"):
        modules = discover_tool_modules()

    assert [m.__name__ for m in modules] == ["cloud_alm_mcp.tools.good"]
    assert any("Failed importing tool module" in rec.message for rec in caplog.records)


def test_all_packaged_tools_register_on_fastmcp():
    app = FastMCP("test")

    names = register_discovered_tools(app, FakeClients())

    expected = {
        "list_features",
        "get_feature",
        "delete_external_reference",
        "list_document_statuses",
        "list_tasks",
        "list_deliverables",
        "list_project_teams",
        "create_test_action",
        "get_hierarchy_node",
        "query_analytics_dataset",
        "get_monitoring_event",
        "get_logs",
        "post_logs",
    }
    assert expected <= set(names)
    assert len(names) == len(set(names)) == 58
