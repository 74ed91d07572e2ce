from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil
import time
from types import ModuleType
from typing import Any, Callable, Iterable, List, Set, get_origin, get_type_hints

from .errors import CalmClientError, ToolFailure
from .observability import log_tool_call

log = logging.getLogger("cloud_alm_mcp.core.registry")

INJECTED_PARAM = "clients"


# --- Discovery helpers ----------------------------------------------------- #


def discover_tool_modules(
    package_name: str = "cloud_alm_mcp.tools",
) -> List[ModuleType]:
    """Import all modules under the given tools package, skipping failures."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        name = finder.name
        if name.rsplit(".", 1)[-1].startswith("_"):
            continue
        try:
            module = importlib.import_module(name)
            modules.append(module)
        except Exception as exc:  # pragma: no cover - logged, not fatal
            log.error("Failed importing tool module %s: %s", name, exc)
            continue

    return modules


def iter_tool_functions(module: ModuleType) -> Iterable[Callable]:
    """Yield coroutine functions whose first parameter is ``clients``."""
    for _, func in inspect.getmembers(module, inspect.iscoroutinefunction):
        if func.__name__.startswith("_"):
            continue
        if func.__module__ != module.__name__:
            # Skip imported functions
            continue

        sig = inspect.signature(func)
        params = list(sig.parameters.values())
        if not params or params[0].name != INJECTED_PARAM:
            log.debug(
                "Skipping %s.%s: first parameter must be '%s'",
                module.__name__,
                func.__name__,
                INJECTED_PARAM,
            )
            continue

        # FastMCP/Pydantic cannot build a schema for Type[...] parameters
        if any(get_origin(p.annotation) is type for p in params[1:]):
            log.debug(
                "Skipping %s.%s: unsupported parameter annotation (Type[...] detected)",
                module.__name__,
                func.__name__,
            )
            continue

        yield func


# --- Wrapping / registration ---------------------------------------------- #


def _wrap_tool(func: Callable, clients_provider: Callable[[], Any]) -> Callable:
    """
    Return a wrapper that injects the API clients, hides them from the
    signature and converts client errors into structured ToolFailure text.
    """
    original_sig = inspect.signature(func)
    type_hints = get_type_hints(func)

    new_params = []
    for i, (name, param) in enumerate(original_sig.parameters.items()):
        if i == 0 and name == INJECTED_PARAM:
            continue  # drop injected clients
        ann = type_hints.get(name, param.annotation)
        new_params.append(param.replace(annotation=ann))

    return_ann = type_hints.get("return", original_sig.return_annotation)
    new_sig = inspect.Signature(parameters=new_params, return_annotation=return_ann)
    tool_name = func.__name__

    async def wrapped(*args, **kwargs):
        start = time.perf_counter()
        try:
            result = await func(clients_provider(), *args, **kwargs)
        except CalmClientError as exc:
            log_tool_call(tool_name, start, exc)
            raise ToolFailure.from_error(exc) from exc
        log_tool_call(tool_name, start)
        return result

    wrapped.__name__ = func.__name__
    wrapped.__doc__ = func.__doc__
    wrapped.__module__ = func.__module__
    wrapped.__signature__ = new_sig  # type: ignore[attr-defined]
    return wrapped


def register_discovered_tools(
    app,
    clients_provider: Any,
    modules: List[ModuleType] | None = None,
) -> List[str]:
    """
    Register discovered tools on an app that exposes a .tool decorator.

    ``clients_provider`` is either the clients object itself or a zero-arg
    callable returning it. Returns the registered tool names.
    """
    if not callable(clients_provider):
        _clients = clients_provider

        def clients_provider():
            return _clients

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    modules = modules if modules is not None else discover_tool_modules()
    seen_names: Set[str] = set()
    registered: List[str] = []

    for module in modules:
        for func in iter_tool_functions(module):
            name = func.__name__
            if name in seen_names:
                raise ValueError(f"Duplicate tool name detected: {name}")

            wrapped = _wrap_tool(func, clients_provider)
            app.tool(name=name)(wrapped)
            seen_names.add(name)
            registered.append(name)
            log.info("Registered tool: %s (%s)", name, module.__name__)

    return registered


__all__ = [
    "INJECTED_PARAM",
    "discover_tool_modules",
    "iter_tool_functions",
    "register_discovered_tools",
]
