"""dispatch.py - Runtime entry points called by rewritten directives.

Rewritten source calls three functions, re-exported from the package root:

    debug_msg(destination, message)
    debug_dump(destination, format, data)
    debug_trace(destination, depth, format)

Each call is independent: the destination is acquired, written and released
within the call. Debug output is best-effort. A value no renderer can
serialise, or a write failure, is logged as a warning and reported as
``False``. Neither propagates into the host program.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .destinations import destination_for
from .renderers import DEFAULT_RENDERER, get_renderer
from .trace import collect, trace_payload

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEvent:
    """A single unit of debug output, built at dispatch time."""

    destination: Optional[str]
    format: Optional[str]
    content: Union[str, Mapping[str, Any]]

    def render(self) -> str:
        """Render the content as text.

        A renderer that fails on the data falls back to the default renderer.
        A failure of the default renderer propagates.
        """
        if isinstance(self.content, str):
            return self.content
        renderer = get_renderer(self.format)
        try:
            return renderer.render(self.content)
        except Exception:
            if renderer is DEFAULT_RENDERER:
                raise
            logger.debug(
                "%s renderer failed; using %s", renderer.name, DEFAULT_RENDERER.name,
                exc_info=True,
            )
            return DEFAULT_RENDERER.render(self.content)


def _deliver(event: LogEvent) -> bool:
    try:
        text = event.render()
    except Exception as exc:
        # Values with a broken __repr__ must not stop the host program.
        logger.warning(
            "debug output to %s could not be rendered: %s: %s",
            event.destination or "<stderr>",
            type(exc).__name__,
            exc,
        )
        return False

    try:
        destination_for(event.destination).write(text)
    except OSError as exc:
        logger.warning(
            "debug output to %s failed: %s",
            event.destination or "<stderr>",
            exc,
        )
        return False
    return True


def emit(destination: Optional[str], content: str) -> bool:
    """Write ``content`` to ``destination`` (or stderr when None/empty).

    A trailing newline is added if ``content`` lacks one.

    Returns:
        True on success, False if the destination could not be written.
    """
    return _deliver(LogEvent(destination, None, content))


def emit_structured(
    destination: Optional[str],
    format: Optional[str],
    data: Mapping[str, Any],
) -> bool:
    """Render ``data`` in ``format`` and write it to ``destination``.

    Unknown or unavailable formats silently use the default renderer.

    Returns:
        True on success, False if the data could not be rendered or the
        destination could not be written.
    """
    return _deliver(LogEvent(destination, format, data))


def debug_msg(destination: Optional[str], message: str) -> bool:
    return emit(destination, message)


def debug_dump(
    destination: Optional[str],
    format: Optional[str],
    data: Mapping[str, Any],
) -> bool:
    return emit_structured(destination, format, data)


def debug_trace(destination: Optional[str], depth: int, format: Optional[str]) -> bool:
    """Dump the ``depth`` innermost frames of the caller's stack.

    Frame 0 is the line that called ``debug_trace``.
    """
    frames = collect(depth, skip=1)
    return emit_structured(destination, format, trace_payload(frames))
