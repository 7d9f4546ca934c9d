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
"""Container exceptions — typed errors raised while mocking and creating subjects."""

from __future__ import annotations

from typing import Any

from automocker.kernel.exceptions import RegistrationException, ResolutionException
from automocker.kernel.types import type_name

NO_VALID_CONSTRUCTORS_MESSAGE = "Automocker could not find constructors that consist entirely of interfaces."


class NoValidConstructorsError(ResolutionException):
    """No constructor of the subject takes only interface-typed parameters.

    The message is fixed so tests can match it exactly; the subject and the
    rejected constructor signatures are available as attributes and in
    ``context``.
    """

    def __init__(self, *, subject: Any, candidates: list[str] | None = None) -> None:
        self.subject = subject
        self.candidates = candidates or []
        super().__init__(
            message=NO_VALID_CONSTRUCTORS_MESSAGE,
            code="NO_VALID_CONSTRUCTORS",
            context={"subject": type_name(subject), "candidates": list(self.candidates)},
        )


class NullArgumentError(RegistrationException, ValueError):
    """A registry operation received ``None`` where a value is required."""

    def __init__(self, argument: str) -> None:
        self.argument = argument
        super().__init__(
            message=f"Value cannot be None (parameter '{argument}')",
            code="NULL_ARGUMENT",
            context={"argument": argument},
        )


class UnsupportedTypeError(ResolutionException, TypeError):
    """The mock factory cannot produce a mock for the requested token."""

    def __init__(self, token: Any, reason: str) -> None:
        self.token = token
        self.reason = reason
        super().__init__(
            message=f"Cannot create a mock for {type_name(token)}: {reason}",
            code="UNSUPPORTED_TYPE",
            context={"token": type_name(token), "reason": reason},
        )


class MockTypeMismatchError(RegistrationException, TypeError):
    """A registry entry does not hold the kind of value the caller asked for.

    Raised by ``Mocker.mock()`` when a concrete implementation is registered
    for the token, and by ``Mocker.inject()`` when the value is not a mock.
    """

    def __init__(self, *, token: Any, expected: str, actual: Any) -> None:
        self.token = token
        self.expected = expected
        self.actual = actual
        actual_name = type(actual).__name__
        super().__init__(
            message=(
                f"Registry entry for {type_name(token)} is {actual_name}, expected {expected}"
            ),
            code="MOCK_TYPE_MISMATCH",
            context={"token": type_name(token), "expected": expected, "actual": actual_name},
        )
