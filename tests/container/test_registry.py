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
"""Tests for the mock and activation registries."""

from typing import Protocol
from unittest.mock import MagicMock, NonCallableMock

import pytest

from automocker.container.exceptions import MockTypeMismatchError, NullArgumentError
from automocker.container.mock_factory import SpecMockFactory
from automocker.container.registry import ActivationRegistry, MockRegistry


class Mailer(Protocol):
    def send(self, to: str, body: str) -> None: ...


class Audit(Protocol):
    def record(self, event: str) -> None: ...


class ConsoleMailer:
    def send(self, to: str, body: str) -> None:
        pass


class CountingFactory:
    def __init__(self) -> None:
        self.created: list[object] = []

    def create(self, token: object) -> NonCallableMock:
        self.created.append(token)
        return MagicMock(spec=token)


class TestMockRegistry:
    def test_creates_lazily_and_caches(self):
        factory = CountingFactory()
        registry = MockRegistry(factory)

        first = registry.get_or_create(Mailer)
        second = registry.get_or_create(Mailer)

        assert first is second
        assert factory.created == [Mailer]

    def test_contains_and_len(self):
        registry = MockRegistry(SpecMockFactory())
        assert Mailer not in registry
        registry.get_or_create(Mailer)
        assert Mailer in registry
        assert len(registry) == 1
        assert list(registry) == [Mailer]

    def test_set_mock_overwrites(self):
        registry = MockRegistry(SpecMockFactory())
        registry.get_or_create(Mailer)
        replacement = MagicMock(spec=Mailer)

        registry.set_mock(Mailer, replacement)

        assert registry.get_mock(Mailer) is replacement

    def test_set_mock_rejects_none(self):
        registry = MockRegistry(SpecMockFactory())
        with pytest.raises(NullArgumentError) as exc_info:
            registry.set_mock(Mailer, None)
        assert exc_info.value.argument == "mock"

    def test_set_mock_rejects_non_mock(self):
        registry = MockRegistry(SpecMockFactory())
        with pytest.raises(MockTypeMismatchError):
            registry.set_mock(Mailer, ConsoleMailer())  # type: ignore[arg-type]

    def test_implementation_bypasses_factory(self):
        factory = CountingFactory()
        registry = MockRegistry(factory)
        mailer = ConsoleMailer()

        registry.set_implementation(Mailer, mailer)

        assert registry.get_or_create(Mailer) is mailer
        assert registry.is_implementation(Mailer)
        assert factory.created == []

    def test_get_mock_rejects_implementation(self):
        registry = MockRegistry(SpecMockFactory())
        registry.set_implementation(Mailer, ConsoleMailer())
        with pytest.raises(MockTypeMismatchError) as exc_info:
            registry.get_mock(Mailer)
        assert exc_info.value.token is Mailer

    def test_set_implementation_rejects_none(self):
        registry = MockRegistry(SpecMockFactory())
        with pytest.raises(NullArgumentError):
            registry.set_implementation(Mailer, None)

    def test_remove_only_affects_one_token(self):
        registry = MockRegistry(SpecMockFactory())
        registry.get_or_create(Mailer)
        audit = registry.get_or_create(Audit)

        registry.remove(Mailer)
        registry.remove(Mailer)

        assert Mailer not in registry
        assert registry.get_or_create(Audit) is audit

    def test_clear(self):
        registry = MockRegistry(SpecMockFactory())
        registry.get_or_create(Mailer)
        registry.set_implementation(Audit, object())

        registry.clear()

        assert len(registry) == 0


class TestActivationRegistry:
    def test_get_unregistered_is_empty(self):
        assert ActivationRegistry().get(Mailer) == ()

    def test_runs_in_registration_order(self):
        registry = ActivationRegistry()
        order: list[str] = []
        registry.add(Mailer, lambda m: order.append("first"))
        registry.add(Mailer, lambda m: order.append("second"))

        registry.run(Mailer, MagicMock())

        assert order == ["first", "second"]

    def test_activations_are_per_token(self):
        registry = ActivationRegistry()
        seen: list[object] = []
        registry.add(Mailer, seen.append)

        registry.run(Audit, MagicMock())

        assert seen == []
        assert Mailer in registry
        assert Audit not in registry

    def test_run_passes_mock(self):
        registry = ActivationRegistry()
        seen: list[object] = []
        registry.add(Mailer, seen.append)
        mock = MagicMock()

        registry.run(Mailer, mock)

        assert seen == [mock]
