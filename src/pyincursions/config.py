"""Cache configuration for pyincursions."""

from __future__ import annotations

import dataclasses
import os
from pathlib import Path
from typing import Any

from pyincursions.exceptions import IncursionsConfigError

#: File name used by the bot when no path is configured.
DEFAULT_CACHE_PATH = "incursions_cache.json"


def _env_indent(value: str) -> int:
    try:
        indent = int(value.strip())
    except ValueError as exc:
        raise IncursionsConfigError(f"INCURSIONS_CACHE_INDENT must be an integer, got {value!r}") from exc
    return indent


@dataclasses.dataclass(frozen=True)
class CacheConfig:
    """Cache store configuration.

    Parameters
    ----------
    path : Path
        Location of the JSON cache file. Relative paths resolve against
        the working directory of the bot process.
    indent : int
        Indentation used when pretty-printing the cache file.
    """

    path: Path = Path(DEFAULT_CACHE_PATH)
    indent: int = 4

    def __post_init__(self) -> None:
        if not isinstance(self.path, Path):
            object.__setattr__(self, "path", Path(self.path))
        if self.indent < 0:
            raise IncursionsConfigError(f"indent must be non-negative, got {self.indent}")

    @classmethod
    def from_env(cls, **overrides: Any) -> CacheConfig:
        """Create configuration from environment variables.

        Reads ``INCURSIONS_CACHE_PATH`` and ``INCURSIONS_CACHE_INDENT``.
        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        path_env = env.get("INCURSIONS_CACHE_PATH")
        if path_env:
            config_kwargs["path"] = Path(path_env)

        indent_env = env.get("INCURSIONS_CACHE_INDENT")
        if indent_env is not None and "indent" not in overrides:
            config_kwargs["indent"] = _env_indent(indent_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
