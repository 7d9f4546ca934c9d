# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Mock factories: produce ``unittest.mock`` objects that stand in for interfaces."""

from __future__ import annotations

import inspect
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from unittest.mock import AsyncMock, MagicMock, NonCallableMock, create_autospec

from pydantic import BaseModel

from automocker.container.exceptions import UnsupportedTypeError
from automocker.core.config import config_properties
from automocker.kernel.types import is_final, type_origin


class MockStyle(str, Enum):
    """How a mock is generated for an interface."""

    MAGIC = "magic"
    ASYNC = "async"
    AUTOSPEC = "autospec"


@config_properties(prefix="automocker.mocks")
class MockProperties(BaseModel):
    """Mock generation settings (``automocker.mocks.*``)."""

    style: MockStyle = MockStyle.MAGIC


@runtime_checkable
class MockFactory(Protocol):
    """Creates a fresh mock object for an interface token."""

    def create(self, token: Any) -> NonCallableMock: ...


class SpecMockFactory:
    """Creates mocks constrained to the attributes of the interface.

    - ``MAGIC``: ``MagicMock(spec=T)``; ``async def`` members of ``T`` become
      ``AsyncMock`` children automatically.
    - ``ASYNC``: ``AsyncMock(spec=T)``, as used for async-only ports.
    - ``AUTOSPEC``: ``create_autospec(T, instance=True)``, which also checks
      call signatures against ``T``.

    Parameterised generics (``Iterable[str]``) are specced by their origin class.
    """

    def __init__(self, style: MockStyle = MockStyle.MAGIC) -> None:
        self._style = MockStyle(style)

    @property
    def style(self) -> MockStyle:
        return self._style

    def create(self, token: Any) -> NonCallableMock:
        spec = type_origin(token)
        if not inspect.isclass(spec):
            raise UnsupportedTypeError(token, "only classes can be mocked")
        if is_final(spec):
            raise UnsupportedTypeError(token, "class is marked @final")

        if self._style is MockStyle.ASYNC:
            return AsyncMock(spec=spec)
        if self._style is MockStyle.AUTOSPEC:
            return create_autospec(spec, instance=True)
        return MagicMock(spec=spec)


def mock_factory_for(properties: MockProperties) -> SpecMockFactory:
    """Build the mock factory selected by *properties*."""
    return SpecMockFactory(properties.style)
