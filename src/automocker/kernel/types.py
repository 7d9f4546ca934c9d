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
"""Type introspection helpers shared by the container and the mock factory."""

from __future__ import annotations

import inspect
import types
import typing
from typing import Any, Union, get_origin


def type_origin(token: Any) -> Any:
    """Return the runtime class behind a parameterised generic, or *token* itself."""
    origin = get_origin(token)
    if origin is None or origin is Union or origin is types.UnionType:
        return token
    return origin


def is_protocol(tp: type) -> bool:
    """Detect whether *tp* is a ``typing.Protocol`` class (not a concrete subclass of one)."""
    checker = getattr(typing, "is_protocol", None)  # Python 3.13+
    if checker is not None:
        return bool(checker(tp))
    return bool(getattr(tp, "_is_protocol", False)) and tp is not typing.Protocol


def is_interface(token: Any) -> bool:
    """Whether *token* names a capability contract rather than a concrete type.

    Protocol classes and abstract classes qualify; generics such as
    ``Iterable[str]`` are judged by their origin class.
    """
    origin = type_origin(token)
    if not inspect.isclass(origin):
        return False
    return is_protocol(origin) or inspect.isabstract(origin)


def is_final(tp: type) -> bool:
    """Whether *tp* was decorated with ``typing.final``."""
    return bool(getattr(tp, "__final__", False))


def type_name(token: Any) -> str:
    """Readable name for a class or annotation, for messages and log fields."""
    if inspect.isclass(token):
        return token.__qualname__
    return repr(token)
