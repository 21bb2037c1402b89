import os
from typing import Any

import pytest

from lbasic.lbasic_lexer import Lexer

# Monkeypatch coverage to bypass teardown crash in act/docker
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    # Nukes the teardown assertion that fails in act
    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


@pytest.fixture  # type: ignore[misc]
def lexer() -> Lexer:
    return Lexer()


@pytest.fixture  # type: ignore[misc]
def f_lexer() -> Lexer:
    """Lexer whose registry only knows the single-letter function F."""
    return Lexer(functions=["F"])
