"""Loading module lists produced by the build tool.

The build-tool side dumps ``{"modules": [{"id", "deps", "virtual"}, ...],
"root": "/abs/project"}``. Module entries are kept raw here; the registry
tolerates malformed ones.
"""

import json
import re
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from modgraph.logging import logger
from modgraph.models.graph import ModuleRecord

# Source files worth showing in the module graph
_RELEVANT_FILE_RE = re.compile(r"\.(tsx?|jsx?|vue|json|css|scss|less|html)($|\?)")


class PayloadError(Exception):
    """Raised when a module graph payload cannot be read."""


class ModuleGraphPayload(BaseModel):
    """Raw module list plus the project root it was collected from."""

    modules: list[Any] = Field(default_factory=list, description="Raw module records")
    root: str = Field(default="", description="Absolute project root")


def parse_payload(data: Any) -> ModuleGraphPayload:
    """Turn decoded JSON into a payload.

    A bare list is taken as the module list with an empty root. A missing or
    non-list ``modules`` key yields an empty module list.

    Args:
        data: Decoded JSON document.

    Returns:
        The payload.

    Raises:
        PayloadError: If the document is neither an object nor an array.
    """
    if isinstance(data, list):
        return ModuleGraphPayload(modules=data)
    if not isinstance(data, dict):
        raise PayloadError(f"Payload must be a JSON object or array, got {type(data).__name__}")

    modules = data.get("modules")
    if not isinstance(modules, list):
        logger.debug("Payload has no module list")
        modules = []
    root = data.get("root")
    return ModuleGraphPayload(modules=modules, root=root if isinstance(root, str) else "")


def load_payload(path: Path | str) -> ModuleGraphPayload:
    """Read a payload from a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The payload.

    Raises:
        PayloadError: If the file cannot be read or is not valid JSON.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise PayloadError(f"Cannot read payload {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadError(f"Payload {path} is not valid JSON: {e}") from e

    return parse_payload(data)


def is_relevant_module(module_id: str) -> bool:
    """Check if an id points at a source file type shown in the graph."""
    return bool(_RELEVANT_FILE_RE.search(module_id))


def filter_relevant(modules: list[Any]) -> list[ModuleRecord]:
    """Keep only relevant source modules and their relevant dependencies.

    Args:
        modules: Raw module records.

    Returns:
        Records whose id has a relevant extension, with deps filtered the
        same way. Malformed entries are dropped.
    """
    result: list[ModuleRecord] = []
    for raw in modules:
        record = ModuleRecord.coerce(raw)
        if record is None or not is_relevant_module(record.id):
            continue
        result.append(
            record.model_copy(update={"deps": [dep for dep in record.deps if is_relevant_module(dep)]})
        )
    return result
