from __future__ import annotations

from collections.abc import Iterator

import pytest

from atomsmith.builder import set_default_builder
from atomsmith.core.hooks import HookRegistry, hook_registry_context


@pytest.fixture(autouse=True)
def isolated_hooks(monkeypatch: pytest.MonkeyPatch) -> Iterator[HookRegistry]:
    """Give every test a private process-wide registry and default builder."""
    for variable in ("ATOMSMITH_DEBUG_FILE", "ATOMSMITH_DEBUG_PAGE", "ATOMSMITH_DEBUG_LOG"):
        monkeypatch.delenv(variable, raising=False)
    set_default_builder(None)
    with hook_registry_context() as registry:
        yield registry
    set_default_builder(None)


@pytest.fixture
def registry() -> HookRegistry:
    return HookRegistry()
