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
"""Automatic mocking container: build subjects with mocked interface dependencies."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar, cast

import structlog

from automocker.container.constructors import ConstructorDescriptor, discover_constructors
from automocker.container.exceptions import NoValidConstructorsError, UnsupportedTypeError
from automocker.container.mock_factory import MockFactory, MockProperties, mock_factory_for
from automocker.container.registry import Activator, ActivationRegistry, MockRegistry
from automocker.core.config import Config
from automocker.kernel.types import type_name

logger = structlog.get_logger("automocker.container")

T = TypeVar("T")


class Mocker:
    """A container that creates subjects with every dependency mocked.

    ``create()`` picks the subject constructor whose parameters are all
    interfaces (Protocols or abstract classes), preferring the one with the
    most parameters, and passes a mock for each. Mocks are cached per type,
    so the mock a test configures or verifies is the one the subject holds::

        mocker = Mocker()
        service = mocker.create(OrderService)
        service.place(order)
        mocker.mock(OrderRepository).save.assert_called_once_with(order)

    Mocks can be requested before or after ``create()``, replaced with
    ``inject()``, swapped for real objects with ``implement()``, and set up
    at construction time with ``activate()``.

    A Mocker is not thread-safe; use one per test.
    """

    def __init__(
        self,
        config: Config | None = None,
        mock_factory: MockFactory | None = None,
    ) -> None:
        if mock_factory is None:
            properties = (config or Config()).bind(MockProperties)
            mock_factory = mock_factory_for(properties)
        self._mocks = MockRegistry(mock_factory)
        self._activations = ActivationRegistry()

    def create(self, subject: type[T]) -> T:
        """Instantiate *subject*, supplying a mock for each constructor dependency.

        Raises:
            NoValidConstructorsError: No constructor takes only interface parameters.
            UnsupportedTypeError: A dependency type cannot be mocked.
        """
        if not isinstance(subject, type):
            raise UnsupportedTypeError(subject, "subjects must be classes")

        constructors = discover_constructors(subject)
        chosen = self._select_constructor(subject, constructors)

        arguments = {p.name: self._mocks.get_or_create(p.annotation) for p in chosen.parameters}

        for param in chosen.parameters:
            token = param.annotation
            if token not in self._activations:
                continue
            if self._mocks.is_implementation(token):
                logger.debug("activation_skipped", token=type_name(token), reason="implementation registered")
                continue
            self._activations.run(token, arguments[param.name])

        return cast(T, chosen.invoke(arguments))

    def _select_constructor(
        self,
        subject: type,
        constructors: list[ConstructorDescriptor],
    ) -> ConstructorDescriptor:
        eligible = [c for c in constructors if c.eligible]
        if not eligible:
            raise NoValidConstructorsError(
                subject=subject,
                candidates=[c.describe() for c in constructors],
            )

        # max() keeps the first of equal arity, so ties go to declaration order.
        chosen = max(eligible, key=lambda c: c.arity)
        logger.debug(
            "constructor_selected",
            subject=type_name(subject),
            constructor=chosen.describe(),
            eligible=len(eligible),
            total=len(constructors),
        )
        return chosen

    def mock(self, token: type[T] | Any, setup: Callable[[Any], Any] | None = None) -> Any:
        """Get the mock for *token*, creating it on first use.

        If *setup* is given it is called with the mock, once, before returning.

        Raises:
            MockTypeMismatchError: A concrete implementation is registered for *token*.
            UnsupportedTypeError: *token* cannot be mocked.
        """
        mock = self._mocks.get_mock(token)
        if setup is not None:
            setup(mock)
        return mock

    def inject(self, token: type[T] | Any, mock: Any) -> None:
        """Replace the mock for *token*. Subjects already created keep their old mock.

        Raises:
            NullArgumentError: *mock* is None.
            MockTypeMismatchError: *mock* is not a ``unittest.mock`` object.
        """
        self._mocks.set_mock(token, mock)

    def implement(self, token: type[T] | Any, instance: Any) -> None:
        """Use *instance* for *token* instead of a generated mock."""
        self._mocks.set_implementation(token, instance)

    def activate(self, token: type[T] | Any, activator: Activator) -> None:
        """Run *activator* against the mock for *token* whenever a subject depending on it is created.

        Activations for the same token accumulate and run in registration order,
        once for every constructor parameter of that type. They are skipped while
        a concrete implementation is registered for *token* through
        ``implement()``. ``reset()`` does not remove them.
        """
        self._activations.add(token, activator)

    def reset(self, token: type[T] | Any | None = None) -> None:
        """Forget all mocks and implementations, or only those for *token*.

        Subjects already created are unaffected. Activations are kept.
        """
        if token is None:
            self._mocks.clear()
        else:
            self._mocks.remove(token)
