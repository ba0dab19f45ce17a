"""config.py - Normalise call-site options into a resolved Config.

Directives are driven by an ordered list of tags. The options accepted here
mirror what a developer passes when enabling debugging comments:

    show      A tag name, a mapping of per-tag options, or a list of either.
              Mappings accept ``tag`` (required), ``trace``, ``output`` and
              ``format``.
    output    Default destination file. ``None`` means stderr.
    format    Default structured format: ``"data"``, ``"json"`` or ``"yaml"``.
    settings  A JSON object literal, or a path to a JSON file. Its ``show``,
              ``output`` and ``format`` keys override the call-site values.
    env       Name of an environment variable holding the ``settings`` string.
              When the variable is unset or empty, directives stay disabled.
    exec_enabled
              Allow ``##[tag]~ code`` directives to run. Only the caller can
              turn this on; settings sources cannot.

The resolver either returns a complete, immutable Config or raises
ConfigError. It never returns a partial configuration.
"""

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = "data"
SETTINGS_KEYS = ("show", "output", "format")


class ConfigError(ValueError):
    """Raised when debugging-comment settings cannot be resolved."""


@dataclass(frozen=True)
class TagDescriptor:
    """A single active tag and the options its directives are rendered with.

    Attributes:
        name: The tag name matched against directive taglists.
        trace_depth: Number of stack frames to dump after each message or
            dump directive. 0 disables tracing.
        output_target: File path for this tag's output, or None for stderr.
        format: Structured format name for dumps and traces, or None to use
            the default renderer.
    """

    name: str
    trace_depth: int = 0
    output_target: Optional[str] = None
    format: Optional[str] = None


@dataclass(frozen=True)
class Config:
    """Fully resolved settings for one rewrite pass."""

    tags: Tuple[TagDescriptor, ...]
    output: Optional[str] = None
    format: str = DEFAULT_FORMAT
    exec_enabled: bool = False


def resolve_config(
    show: Any = None,
    output: Optional[str] = None,
    format: Optional[str] = None,
    exec_enabled: bool = False,
    settings: Optional[str] = None,
    env: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Optional[Config]:
    """Resolve call-site options into a Config.

    Args:
        show: Tags to activate (see module docstring).
        output: Default destination path, or None for stderr.
        format: Default structured format name.
        exec_enabled: Whether exec directives are rewritten into code.
        settings: JSON object text or a JSON file path.
        env: Environment variable to read ``settings`` from.
        environ: Mapping used instead of ``os.environ`` (mainly for tests).

    Returns:
        The resolved Config, or None when there is nothing to show (no tags,
        or ``env`` names a variable that is unset or empty).

    Raises:
        ConfigError: If the settings are malformed or unreadable, or a tag
            entry is invalid.
    """
    if env:
        environ = os.environ if environ is None else environ
        value = environ.get(env)
        if not value:
            logger.debug("environment variable %s not set; directives disabled", env)
            return None
        settings = value

    if settings is not None:
        overrides = load_settings(settings)
        if overrides.get("show"):
            show = overrides["show"]
        if overrides.get("output"):
            output = overrides["output"]
        if overrides.get("format"):
            format = overrides["format"]

    if not show:
        return None

    default_format = str(format or DEFAULT_FORMAT).lower()
    entries = show if isinstance(show, (list, tuple)) else [show]
    tags = tuple(_tag_descriptor(entry, output, default_format) for entry in entries)

    return Config(
        tags=tags,
        output=output,
        format=default_format,
        exec_enabled=bool(exec_enabled),
    )


def load_settings(settings: str) -> dict:
    """Parse a settings string into a dict of recognised keys.

    A string starting with ``{`` is decoded as JSON directly. Anything else is
    treated as a file path, and the file's contents are decoded.

    Raises:
        ConfigError: If the file cannot be read, the JSON is malformed, or it
            does not describe an object.
    """
    text = settings.strip()
    if not text.startswith("{"):
        try:
            with open(settings, encoding="utf-8") as f:
                text = f.read()
        except OSError as exc:
            raise ConfigError(f"cannot read settings file {settings!r}: {exc}") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"malformed settings JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(
            f"settings must be a JSON object, got {type(data).__name__}"
        )
    return {key: data[key] for key in SETTINGS_KEYS if key in data}


def _tag_descriptor(entry: Any, output: Optional[str], format: str) -> TagDescriptor:
    if isinstance(entry, str):
        if not entry.strip():
            raise ConfigError("tag names must not be empty")
        return TagDescriptor(name=entry.strip(), output_target=output, format=format)

    if not isinstance(entry, Mapping):
        raise ConfigError(f"invalid tag entry {entry!r}")

    name = entry.get("tag")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"tag entry {dict(entry)!r} has no 'tag' name")

    trace = entry.get("trace", 0) or 0
    if isinstance(trace, bool) or not isinstance(trace, int) or trace < 0:
        raise ConfigError(f"trace for tag {name!r} must be an integer >= 0, got {trace!r}")

    tag_format = entry.get("format") or format
    return TagDescriptor(
        name=name.strip(),
        trace_depth=trace,
        output_target=entry.get("output", output),
        format=str(tag_format).lower(),
    )
