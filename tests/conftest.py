"""Pytest configuration and shared fixtures."""

import json
import tempfile
from pathlib import Path

import pytest

from modgraph.core.registry import ModuleRegistry
from modgraph.session import ModuleGraphSession

ROOT = "/root"


def _module(module_id: str, deps: list[str] | None = None, virtual: bool = False) -> dict:
    """Build a raw module record as the build tool reports it."""
    return {"id": module_id, "deps": deps or [], "virtual": virtual}


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def scenario_modules() -> list[dict]:
    """Two in-root modules, a.ts importing b.ts."""
    return [
        _module("/root/a.ts", ["/root/b.ts"]),
        _module("/root/b.ts"),
    ]


@pytest.fixture
def app_modules() -> list[dict]:
    """A small Vue-style app with vendor, virtual and style modules."""
    return [
        _module(
            "/root/src/main.ts",
            [
                "/root/src/App.vue",
                "/root/node_modules/vue/index.js",
                "virtual:routes",
            ],
        ),
        _module(
            "/root/src/App.vue",
            [
                "/root/src/App.vue?vue&type=style&index=0&lang.css",
                "/root/src/components/Button.tsx",
            ],
        ),
        _module("/root/src/App.vue?vue&type=style&index=0&lang.css"),
        _module("/root/src/components/Button.tsx", ["/root/src/utils/format.ts"]),
        _module("/root/src/utils/format.ts"),
        _module("/root/node_modules/vue/index.js", ["/root/node_modules/vue/runtime.js"]),
        _module("/root/node_modules/vue/runtime.js"),
        _module("virtual:routes", ["/root/src/pages/Home.tsx"], virtual=True),
        _module("/root/src/pages/Home.tsx", ["/root/src/components/Button.tsx"]),
    ]


@pytest.fixture
def registry() -> ModuleRegistry:
    """An empty module registry."""
    return ModuleRegistry()


@pytest.fixture
def session() -> ModuleGraphSession:
    """A session with a short search debounce."""
    return ModuleGraphSession(debounce=0.05)


@pytest.fixture
def payload_file(temp_dir: Path, app_modules: list[dict]) -> Path:
    """Write the app modules to a payload JSON file."""
    path = temp_dir / "graph.json"
    path.write_text(json.dumps({"modules": app_modules, "root": ROOT}))
    return path
