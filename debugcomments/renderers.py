"""renderers.py - Serialisation backends for structured debug output.

Three interchangeable renderers turn an ordered ``name -> value`` mapping into
text:

    DataRenderer  — ``pprint`` dump, terse and indented. Always available,
                    and the fallback for every other format.
    JsonRenderer  — pretty-printed JSON, non-ASCII kept as-is.
    YamlRenderer  — block-style YAML via PyYAML.

``get_renderer()`` resolves a format name in fixed order (yaml, json, then
default). An unknown name, or a renderer whose library cannot be imported,
resolves to the DataRenderer without raising.
"""

import importlib
import json
import pprint
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional


class Renderer(ABC):
    """Abstract base class for structured-payload renderers.

    Subclasses set ``name`` and implement ``render()``. Renderers that depend
    on an optional library override ``available()``.
    """

    name: str = ""

    def available(self) -> bool:
        return True

    @abstractmethod
    def render(self, data: Mapping[str, Any]) -> str:
        """Serialise ``data`` to text, keeping its insertion order."""


class DataRenderer(Renderer):
    name = "data"

    def render(self, data: Mapping[str, Any]) -> str:
        return pprint.pformat(dict(data), indent=2, sort_dicts=False)


class JsonRenderer(Renderer):
    """Pretty JSON. Values JSON cannot encode are written as their ``repr``."""

    name = "json"

    def render(self, data: Mapping[str, Any]) -> str:
        return json.dumps(dict(data), indent=3, ensure_ascii=False, default=repr)


class YamlRenderer(Renderer):
    """Block-style YAML using PyYAML, imported on first use."""

    name = "yaml"

    def __init__(self) -> None:
        self._yaml = None

    def available(self) -> bool:
        if self._yaml is None:
            try:
                self._yaml = importlib.import_module("yaml")
            except ImportError:
                return False
        return True

    def render(self, data: Mapping[str, Any]) -> str:
        if not self.available():
            raise RuntimeError("PyYAML is not installed")
        return self._yaml.dump(
            dict(data),
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )


DEFAULT_RENDERER = DataRenderer()

# Resolution order: first entry whose name matches and is available wins.
_RENDERERS = (YamlRenderer(), JsonRenderer(), DEFAULT_RENDERER)


def get_renderer(format: Optional[str]) -> Renderer:
    """Return the renderer for ``format``, falling back to the default.

    Args:
        format: Case-insensitive format name, or None.

    Example:
        >>> get_renderer("JSON").name
        'json'
        >>> get_renderer("xml").name
        'data'
    """
    wanted = (format or "").lower()
    for renderer in _RENDERERS:
        if renderer.name == wanted and renderer.available():
            return renderer
    return DEFAULT_RENDERER

