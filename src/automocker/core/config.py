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
"""Optional settings for automocker: a YAML/TOML file, env overrides, pydantic binding."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

M = TypeVar("M", bound=BaseModel)
C = TypeVar("C", bound=type)

_CONFIG_PROPERTIES_ATTR = "__automocker_config_prefix__"

ENV_PREFIX = "AUTOMOCKER_"


def config_properties(prefix: str) -> Callable[[C], C]:
    """Mark a pydantic model as the settings found under *prefix*.

    Usage:
        @config_properties(prefix="automocker.mocks")
        class MockProperties(BaseModel):
            style: MockStyle = MockStyle.MAGIC
    """

    def decorator(cls: C) -> C:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Environment variable that overrides *key*: ``automocker.mocks.style`` -> ``AUTOMOCKER_MOCKS_STYLE``."""
    name = key.removeprefix("automocker.").upper().replace(".", "_").replace("-", "_")
    return ENV_PREFIX + name


class Config:
    """Nested settings addressed with dot-separated keys.

    An environment variable named by :func:`env_key` beats the value in the
    data, which beats the model default applied by :meth:`bind`.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(cls, path: str | Path) -> Config:
        """Read a ``.toml`` file, or any other suffix as YAML. A missing file gives empty settings."""
        path = Path(path)
        if not path.exists():
            return cls()
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return cls(tomllib.load(f))
        with open(path) as f:
            return cls(yaml.safe_load(f) or {})

    def _lookup(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(part)
        return node

    def get(self, key: str, default: Any = None) -> Any:
        env_val = os.environ.get(env_key(key))
        if env_val is not None:
            return env_val
        value = self._lookup(key)
        return default if value is None else value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """The mapping under *prefix*, with env overrides applied to the keys it already has."""
        node = self._lookup(prefix)
        section = dict(node) if isinstance(node, dict) else {}
        for key in section:
            section[key] = self.get(f"{prefix}.{key}", section[key])
        return section

    def bind(self, model: type[M]) -> M:
        """Validate the section named by *model*'s ``@config_properties`` prefix into *model*.

        Fields absent from the data can still be set from the environment.

        Raises:
            ValueError: *model* is not decorated, or validation failed.
        """
        prefix = getattr(model, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise ValueError(f"{model.__name__} is not decorated with @config_properties")

        section = self.get_section(prefix)
        for name in model.model_fields:
            value = self.get(f"{prefix}.{name}")
            if value is not None:
                section[name] = value
        try:
            return model.model_validate(section)
        except ValidationError as exc:
            raise ValueError(
                f"Configuration validation failed for '{model.__name__}' (prefix='{prefix}'):\n{exc}"
            ) from exc
