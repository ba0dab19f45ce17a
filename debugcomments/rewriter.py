"""rewriter.py - Turn directive lines into executable debug calls.

``rewrite()`` takes source text and an ordered sequence of TagDescriptors and
returns new text in which each directive claimed by an active tag has been
replaced:

    ##[dbg] loading            ->  __import__('debugcomments').debug_msg(None, 'loading')
    ##[dbg]= n, rows:data      ->  __import__('debugcomments').debug_dump(None, 'data', {'n': n, 'rows': data})
    ##[dbg]~ check(x)          ->  check(x)        (exec enabled)
                               ->  <empty line>    (exec disabled)

Guarantees:
    - The number of lines never changes, and each line keeps its terminator.
    - A directive is claimed by the first tag, in configured order, that its
      taglist names. Later tags never see it again.
    - Directives naming no active tag, malformed markers and ordinary lines
      come back byte-identical.
    - Dumped expressions are copied into the call verbatim. They are
      evaluated by the host when the line runs, never here.
    - An exec directive whose code is itself a directive becomes an empty
      line, so a second pass finds nothing left to rewrite.
"""

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from .config import TagDescriptor
from .grammar import Directive, DirectiveKind, DumpEntry, classify_line, parse_dump_payload

logger = logging.getLogger(__name__)

# Rewritten lines reach the dispatcher through the package root without an
# import statement, so the line count stays fixed.
CALL_PREFIX = "__import__('debugcomments')."

_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")


@dataclass(frozen=True)
class Invocation:
    """A rendered debug call for one consumed message or dump directive.

    Attributes:
        kind: DirectiveKind.MESSAGE or DirectiveKind.DUMP.
        destination: Output file path, or None for stderr.
        format: Structured format name used for dumps and traces.
        trace_depth: Frames to trace after the call; 0 for none.
        message: Literal message text (message directives).
        entries: Ordered name/expression pairs (dump directives).
    """

    kind: DirectiveKind
    destination: Optional[str]
    format: Optional[str]
    trace_depth: int = 0
    message: str = ""
    entries: Tuple[DumpEntry, ...] = ()

    def to_source(self) -> str:
        """Render the invocation as a single line of Python."""
        if self.kind is DirectiveKind.DUMP:
            mapping = ", ".join(f"{name!r}: {expr}" for name, expr in self.entries)
            call = (
                f"{CALL_PREFIX}debug_dump("
                f"{self.destination!r}, {self.format!r}, {{{mapping}}})"
            )
        elif self.kind is DirectiveKind.MESSAGE:
            call = f"{CALL_PREFIX}debug_msg({self.destination!r}, {self.message!r})"
        else:
            raise ValueError(f"no invocation for {self.kind.value} directives")

        if self.trace_depth > 0:
            call += (
                f"; {CALL_PREFIX}debug_trace("
                f"{self.destination!r}, {self.trace_depth}, {self.format!r})"
            )
        return call


def build_invocation(directive: Directive, tag: TagDescriptor) -> Invocation:
    """Create the Invocation for a message or dump directive claimed by ``tag``."""
    if directive.kind is DirectiveKind.DUMP:
        return Invocation(
            kind=directive.kind,
            destination=tag.output_target,
            format=tag.format,
            trace_depth=tag.trace_depth,
            entries=tuple(parse_dump_payload(directive.payload)),
        )
    return Invocation(
        kind=directive.kind,
        destination=tag.output_target,
        format=tag.format,
        trace_depth=tag.trace_depth,
        message=directive.payload,
    )


def render_directive(directive: Directive, tag: TagDescriptor, exec_enabled: bool) -> str:
    """Return the replacement for ``directive`` (without a line terminator)."""
    if directive.kind is DirectiveKind.EXEC:
        # Code that is itself a directive would only be rewritten again later.
        if not exec_enabled or classify_line(directive.payload) is not None:
            return ""
        return directive.indent + directive.payload
    return directive.indent + build_invocation(directive, tag).to_source()


def _split_terminator(line: str) -> Tuple[str, str]:
    body = line.rstrip("\r\n")
    return body, line[len(body):]


def rewrite(text: str, tags: Iterable[TagDescriptor], exec_enabled: bool = False) -> str:
    """Rewrite every directive in ``text`` claimed by one of ``tags``.

    Args:
        text: Source text to transform.
        tags: Active tags in priority order.
        exec_enabled: Whether exec directives become code (True) or empty
            lines (False).

    Returns:
        The rewritten text, with the same number of lines as ``text``.

    Example:
        >>> from debugcomments.config import TagDescriptor
        >>> rewrite("##[dbg] hi\\n", [TagDescriptor("dbg")])
        "__import__('debugcomments').debug_msg(None, 'hi')\\n"
    """
    tags = tuple(tags)
    if not tags:
        return text

    lines: List[str] = _LINE_RE.findall(text)
    pending = {}
    for index, line in enumerate(lines):
        directive = classify_line(_split_terminator(line)[0])
        if directive is not None:
            pending[index] = directive

    for tag in tags:
        claimed = [i for i, d in pending.items() if d.matches(tag.name)]
        for index in claimed:
            directive = pending.pop(index)
            terminator = _split_terminator(lines[index])[1]
            lines[index] = render_directive(directive, tag, exec_enabled) + terminator
        if claimed:
            logger.debug("tag %r consumed %d directive(s)", tag.name, len(claimed))

    return "".join(lines)
