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
"""Type-keyed registries for mocks, implementations, and activations."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any
from unittest.mock import NonCallableMock

import structlog

from automocker.container.exceptions import MockTypeMismatchError, NullArgumentError
from automocker.container.mock_factory import MockFactory
from automocker.kernel.types import type_name

logger = structlog.get_logger("automocker.container")

Activator = Callable[[Any], Any]


class EntryKind(Enum):
    """What a registry entry holds."""

    MOCK = auto()
    IMPLEMENTATION = auto()


@dataclass
class Entry:
    """A resolved value for one token."""

    kind: EntryKind
    value: Any = field(repr=False)


class MockRegistry:
    """Maps an interface token to a single mock or concrete implementation.

    Lookups for the same token return the identical object until the entry
    is removed or overwritten.
    """

    def __init__(self, mock_factory: MockFactory) -> None:
        self._factory = mock_factory
        self._entries: dict[Any, Entry] = {}

    def __contains__(self, token: object) -> bool:
        return token in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._entries)

    def get_or_create(self, token: Any) -> Any:
        """Return the value registered for *token*, creating a mock if there is none."""
        entry = self._entries.get(token)
        if entry is None:
            entry = Entry(kind=EntryKind.MOCK, value=self._factory.create(token))
            self._entries[token] = entry
            logger.debug("mock_created", token=type_name(token))
        return entry.value

    def get_mock(self, token: Any) -> NonCallableMock:
        """Like :meth:`get_or_create`, but only for mock entries."""
        value = self.get_or_create(token)
        if self._entries[token].kind is not EntryKind.MOCK:
            raise MockTypeMismatchError(token=token, expected="a mock", actual=value)
        return value

    def is_implementation(self, token: Any) -> bool:
        entry = self._entries.get(token)
        return entry is not None and entry.kind is EntryKind.IMPLEMENTATION

    def set_mock(self, token: Any, mock: NonCallableMock | None) -> None:
        """Register *mock* for *token*, replacing any existing entry."""
        if mock is None:
            raise NullArgumentError("mock")
        if not isinstance(mock, NonCallableMock):
            raise MockTypeMismatchError(token=token, expected="a unittest.mock object", actual=mock)
        self._entries[token] = Entry(kind=EntryKind.MOCK, value=mock)
        logger.debug("mock_injected", token=type_name(token))

    def set_implementation(self, token: Any, instance: Any) -> None:
        """Register a concrete *instance* for *token*, bypassing mock generation."""
        if instance is None:
            raise NullArgumentError("instance")
        self._entries[token] = Entry(kind=EntryKind.IMPLEMENTATION, value=instance)
        logger.debug("implementation_registered", token=type_name(token), impl=type(instance).__qualname__)

    def remove(self, token: Any) -> None:
        """Drop the entry for *token*; no-op if absent."""
        if self._entries.pop(token, None) is not None:
            logger.debug("mock_reset", token=type_name(token))

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.debug("mocks_reset", count=count)


class ActivationRegistry:
    """Ordered activation callbacks per interface token.

    Registering another activation for a token appends to its sequence; the
    first registered runs first. Entries are never removed.
    """

    def __init__(self) -> None:
        self._activators: dict[Any, list[Activator]] = {}

    def __contains__(self, token: object) -> bool:
        return token in self._activators

    def add(self, token: Any, activator: Activator) -> None:
        self._activators.setdefault(token, []).append(activator)
        logger.debug(
            "activation_registered",
            token=type_name(token),
            position=len(self._activators[token]),
        )

    def get(self, token: Any) -> tuple[Activator, ...]:
        return tuple(self._activators.get(token, ()))

    def run(self, token: Any, mock: Any) -> None:
        """Invoke every activation for *token* against *mock*, in registration order."""
        for activator in self.get(token):
            activator(mock)
