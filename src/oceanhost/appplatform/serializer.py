"""
App spec serializer.

Renders an AppSpec as App Platform YAML. Nulls and empty collections are
dropped at every nesting level so the document only carries what was set.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

import yaml

from oceanhost.appplatform.models import AppSpec


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, dict)) and len(value) == 0:
        return True
    return False


def _to_plain(value: Any) -> Any:
    """Convert dataclasses, enums and lists to plain YAML-safe values."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        result: dict[str, Any] = {}
        for f in dataclasses.fields(value):
            item = _to_plain(getattr(value, f.name))
            if not _is_empty(item):
                result[f.name] = item
        return result

    if isinstance(value, Enum):
        return value.value

    if isinstance(value, (list, tuple)):
        items = [_to_plain(v) for v in value]
        return [v for v in items if not _is_empty(v)]

    if isinstance(value, dict):
        result = {}
        for k, v in value.items():
            item = _to_plain(v)
            if not _is_empty(item):
                result[str(k)] = item
        return result

    return value


def to_dict(spec: AppSpec) -> dict[str, Any]:
    """
    Convert an AppSpec to a plain dict in App Platform key order.

    Example:
        AppSpec(name="shop", region=Region.NYC) -> {"name": "shop", "region": "nyc"}
    """
    return _to_plain(spec)


def to_yaml(spec: AppSpec) -> str:
    """Serialize an AppSpec to YAML. Same input, same output."""
    return yaml.safe_dump(
        to_dict(spec),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )
