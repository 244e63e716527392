"""Base model for persisted incursion data.

Every cache model inherits from :class:`IncursionsBaseModel` which
provides:

* ``alias_generator=to_camel`` so the camelCase keys of the cache file
  map automatically to snake_case fields.
* ``populate_by_name`` so code can construct models with snake_case
  keyword arguments.
* ``extra="allow"`` so keys this package does not model (written by a
  newer bot, or added by hand) survive the next rewrite of the file.
* :meth:`IncursionsBaseModel.to_json_dict` which dumps back to the
  camelCase on-disk shape.

Display-only text fields use :data:`DisplayStr`, which accepts the
numbers and booleans older cache files hold for them.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict
from pydantic.alias_generators import to_camel


def to_display_str(value: Any) -> Any:
    """Render JSON scalars as text; anything else is left for validation.

    Booleans become ``"true"``/``"false"`` (their JSON spelling) and
    numbers become their ``str()`` form.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


DisplayStr = Annotated[str, BeforeValidator(to_display_str)]
"""Annotated ``str`` that also accepts JSON numbers and booleans."""


class IncursionsBaseModel(BaseModel):
    """Base for models stored in the incursions cache file."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_json_dict(self) -> dict[str, Any]:
        """Return a JSON-ready dict keyed the way the cache file is."""
        return self.model_dump(mode="json", by_alias=True)
