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
"""Constructor discovery: the ways a subject class can be instantiated.

A subject's constructors are the class call itself (its ``__init__``,
``__new__`` or metaclass ``__call__``) plus any classmethod marked with
:func:`constructor`. Each is described by its ordered parameters and
whether every parameter is an interface type (a ``typing.Protocol`` or an
abstract class).
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

import structlog

from automocker.kernel.types import is_interface, type_name

logger = structlog.get_logger("automocker.container")

F = TypeVar("F")

INIT = "__init__"

_CONSTRUCTOR_ATTR = "__automocker_constructor__"
_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def constructor(func: F) -> F:
    """Mark a classmethod as an alternative constructor.

    ``Mocker.create()`` considers marked classmethods alongside ``__init__``
    when choosing how to build a subject. The decorator can sit above or
    below ``@classmethod``::

        class ReportService:
            def __init__(self, path: str) -> None: ...

            @constructor
            @classmethod
            def from_store(cls, store: ReportStore) -> ReportService: ...
    """
    target = func.__func__ if isinstance(func, classmethod) else func
    setattr(target, _CONSTRUCTOR_ATTR, True)
    return func


def _annotation_name(annotation: Any) -> str:
    if annotation is inspect.Parameter.empty:
        return "<unannotated>"
    return type_name(annotation)


@dataclass(frozen=True)
class ParameterDescriptor:
    """One constructor parameter and its declared type."""

    name: str
    annotation: Any
    kind: Any

    @property
    def is_interface(self) -> bool:
        return self.annotation is not inspect.Parameter.empty and is_interface(self.annotation)


@dataclass(frozen=True)
class ConstructorDescriptor:
    """A constructor of ``subject`` with its ordered parameters."""

    subject: type
    name: str
    parameters: tuple[ParameterDescriptor, ...] = ()

    @property
    def eligible(self) -> bool:
        """True when every parameter can be satisfied with a mock."""
        return all(p.is_interface for p in self.parameters)

    @property
    def arity(self) -> int:
        return len(self.parameters)

    def describe(self) -> str:
        params = ", ".join(f"{p.name}: {_annotation_name(p.annotation)}" for p in self.parameters)
        if self.name == INIT:
            return f"{self.subject.__qualname__}({params})"
        return f"{self.subject.__qualname__}.{self.name}({params})"

    def invoke(self, arguments: Mapping[str, Any]) -> Any:
        """Call the constructor with *arguments* keyed by parameter name."""
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for param in self.parameters:
            if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(arguments[param.name])
            else:
                kwargs[param.name] = arguments[param.name]

        factory = self.subject if self.name == INIT else getattr(self.subject, self.name)
        return factory(*args, **kwargs)


def discover_constructors(subject: type) -> list[ConstructorDescriptor]:
    """Enumerate *subject*'s constructors in declaration order.

    The primary constructor comes first. It is described by calling
    ``inspect.signature`` on the class itself, so a metaclass ``__call__``,
    a ``__new__`` (as on ``NamedTuple`` classes) or ``__init__`` is used,
    whichever Python would dispatch to. A class that defines none of them
    has a single zero-parameter constructor. Marked classmethods follow in
    MRO order, most-derived class first. A name redefined without the
    marker hides the base class constructor.
    """
    found: list[ConstructorDescriptor] = []

    primary = _describe_primary(subject)
    if primary is not None:
        found.append(primary)

    seen: set[str] = {INIT}
    for klass in subject.__mro__:
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)
            if not isinstance(attr, classmethod):
                continue
            if not getattr(attr.__func__, _CONSTRUCTOR_ATTR, False):
                continue
            desc = _describe(subject, name, getattr(subject, name), attr.__func__)
            if desc is not None:
                found.append(desc)

    return found


def _primary_source(subject: type) -> Callable[..., Any] | None:
    """The function whose annotations describe ``subject(...)``, or None for ``object()``."""
    for meta in type(subject).__mro__:
        if meta is type:
            break
        call = vars(meta).get("__call__")
        if inspect.isfunction(call):
            return call

    for klass in subject.__mro__:
        if klass is object:
            break
        # __new__ wins over __init__ when a class defines both.
        for name in ("__new__", INIT):
            attr = vars(klass).get(name)
            if isinstance(attr, (staticmethod, classmethod)):
                attr = attr.__func__
            if inspect.isfunction(attr):
                return attr
    return None


def _describe_primary(subject: type) -> ConstructorDescriptor | None:
    source = _primary_source(subject)
    if source is None and subject.__init__ is object.__init__ and subject.__new__ is object.__new__:
        return ConstructorDescriptor(subject=subject, name=INIT)
    return _describe(subject, INIT, subject, source)


def _describe(
    subject: type,
    name: str,
    bound: Callable[..., Any],
    func: Callable[..., Any] | None,
) -> ConstructorDescriptor | None:
    try:
        signature = inspect.signature(bound)
    except (TypeError, ValueError):
        logger.debug("constructor_signature_unavailable", subject=subject.__qualname__, constructor=name)
        return None

    hints = _get_type_hints(subject, func) if func is not None else {}
    return ConstructorDescriptor(
        subject=subject,
        name=name,
        parameters=tuple(
            ParameterDescriptor(
                name=p.name,
                annotation=hints.get(p.name, inspect.Parameter.empty),
                kind=p.kind,
            )
            for p in signature.parameters.values()
            if p.kind not in _VARIADIC
        ),
    )


def _get_type_hints(subject: type, func: Callable[..., Any]) -> dict[str, Any]:
    try:
        hints = typing.get_type_hints(func)
    except TypeError:
        hints = {}
    except NameError as exc:
        logger.warning(
            "constructor_type_hints_unresolved",
            subject=subject.__qualname__,
            missing_name=exc.name,
        )
        hints = {}
    hints.pop("return", None)
    return hints
