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
"""Tests for the automocker kernel exception hierarchy."""

from automocker.kernel.exceptions import (
    AutomockerException,
    RegistrationException,
    ResolutionException,
)


class TestAutomockerException:
    def test_basic_creation(self):
        exc = AutomockerException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = AutomockerException("no constructor", code="NO_VALID_CONSTRUCTORS")
        assert exc.code == "NO_VALID_CONSTRUCTORS"

    def test_with_context(self):
        exc = AutomockerException("bad token", code="UNSUPPORTED_TYPE", context={"token": "int"})
        assert exc.context["token"] == "int"

    def test_context_defaults_to_empty_dict(self):
        exc = AutomockerException("test")
        exc.context["key"] = "value"
        exc2 = AutomockerException("test2")
        assert exc2.context == {}


class TestExceptionHierarchy:
    def test_resolution_is_automocker(self):
        assert issubclass(ResolutionException, AutomockerException)

    def test_registration_is_automocker(self):
        assert issubclass(RegistrationException, AutomockerException)

    def test_categories_are_distinct(self):
        assert not issubclass(ResolutionException, RegistrationException)
        assert not issubclass(RegistrationException, ResolutionException)
