"""
UI configuration.

``UISetting`` controls the documentation page. It can be built in
code, from a dict (e.g. a section of an application config file), or
from ``ROUTEDOC_*`` environment variables and an optional ``.env`` file.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

from dotenv import dotenv_values


@dataclass
class UISetting:
    """
    Documentation page settings.

    Attributes:
        detach_spec: Serve the page without an inline document; the viewer
            fetches ``swagger.json`` instead.
        hide_top: Hide the viewer's top bar. Only honoured with
            ``detach_spec``; the inline page always hides it.
        cdn: Base URL of the Swagger UI bundle. Empty means the default.
    """
    detach_spec: bool = False
    hide_top: bool = False
    cdn: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UISetting":
        """Create settings from a dict, ignoring unknown and private keys."""
        setting = cls()
        for key, value in data.items():
            if key.startswith("_"):
                continue
            if hasattr(setting, key):
                setattr(setting, key, value)
        return setting

    @classmethod
    def from_env(cls, prefix: str = "ROUTEDOC_", env_file: Optional[str] = None) -> "UISetting":
        """
        Create settings from environment variables.

        ``ROUTEDOC_DETACH_SPEC=true`` sets ``detach_spec``. Values from
        ``env_file`` are read first; the process environment wins.
        """
        values: Dict[str, Optional[str]] = {}
        if env_file:
            values.update(dotenv_values(env_file))
        values.update(os.environ)

        data: Dict[str, Any] = {}
        for key, value in values.items():
            if not key.startswith(prefix) or value is None:
                continue
            data[key[len(prefix):].lower()] = _parse_value(value)
        return cls.from_dict(data)


def _parse_value(value: str) -> Any:
    if value.lower() in ("true", "yes", "1"):
        return True
    if value.lower() in ("false", "no", "0"):
        return False
    return value


__all__ = ["UISetting"]
