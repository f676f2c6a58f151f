from __future__ import annotations

import pytest

from fmt_builder import FormatBuilder


@pytest.fixture
def builder() -> FormatBuilder:
    return FormatBuilder()


@pytest.fixture
def settings(builder):
    return builder.settings
