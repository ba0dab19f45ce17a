"""grammar.py - Recognise directive lines and parse dump payloads.

A directive is one line of source text of the form::

    <indent>##[<taglist>]<rest>

where ``<indent>`` is horizontal whitespace only and ``<rest>`` selects the
shape:

    ``= a, b:expr``   dump     name/expression pairs to serialise
    ``~ code()``      exec     code run in place (when exec is enabled)
    `` any text``     message  literal text to print

The sigil must follow ``]`` immediately; ``##[t] = x`` is a message. Shape
precedence is fixed (dump, then exec, then message), so a line always has
exactly one classification. The classifier works on a single line and never
looks at its neighbours.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, NamedTuple, Optional

# Horizontal whitespace only: a directive never spans lines.
_HWS = r"[^\S\r\n]"

_DIRECTIVE_RE = re.compile(
    rf"^(?P<indent>{_HWS}*)##\[(?P<taglist>[^\[\]\r\n]*)\](?P<rest>[^\r\n]*)$"
)
_TAG_SPLIT_RE = re.compile(r"[\s,]+")
_TOKEN_SPLIT_RE = re.compile(r"[\s,]+")
_LABEL_RE = re.compile(r"^(\w+)[:=]")

# Leading characters that mark a container in annotations written for
# sigil-typed hosts; they carry no meaning for Python expressions.
CONTAINER_SIGILS = "@%"


class DirectiveKind(Enum):
    DUMP = "dump"
    EXEC = "exec"
    MESSAGE = "message"


@dataclass(frozen=True)
class Directive:
    """A classified directive line.

    Attributes:
        indent: The whitespace that preceded the marker.
        taglist: Tag names listed inside the marker brackets.
        kind: Which of the three shapes the line has.
        payload: Trailing text after the sigil, with surrounding whitespace
            stripped.
    """

    indent: str
    taglist: FrozenSet[str]
    kind: DirectiveKind
    payload: str

    def matches(self, tag: str) -> bool:
        return tag in self.taglist


class DumpEntry(NamedTuple):
    name: str
    expression: str


def parse_taglist(text: str) -> FrozenSet[str]:
    """Split a marker's taglist on commas and/or whitespace."""
    return frozenset(t for t in _TAG_SPLIT_RE.split(text) if t)


def classify_line(line: str) -> Optional[Directive]:
    """Classify one line of text (without its terminator).

    Returns:
        The Directive, or None if the line is not a well-formed directive.
        Unbalanced brackets, an empty taglist, or any non-whitespace text
        before the marker all yield None.
    """
    match = _DIRECTIVE_RE.match(line)
    if match is None:
        return None

    taglist = parse_taglist(match.group("taglist"))
    if not taglist:
        return None

    rest = match.group("rest")
    if rest.startswith("="):
        kind, payload = DirectiveKind.DUMP, rest[1:]
    elif rest.startswith("~"):
        kind, payload = DirectiveKind.EXEC, rest[1:]
    else:
        kind, payload = DirectiveKind.MESSAGE, rest

    return Directive(
        indent=match.group("indent"),
        taglist=taglist,
        kind=kind,
        payload=payload.strip(),
    )


def parse_dump_payload(text: str) -> List[DumpEntry]:
    """Parse a dump directive's expression list.

    Tokens are separated by commas and/or whitespace. A token may carry a
    label as ``name:expr`` or ``name=expr``; otherwise the token text is its
    own name. A leading container sigil is dropped from both parts.

    Expressions are returned verbatim and are never evaluated here: the
    rewritten call evaluates them in the host's scope when it runs, so the
    dispatcher always sees the live object rather than a snapshot.

    Example:
        >>> parse_dump_payload("a, b:x.y %z")
        [DumpEntry(name='a', expression='a'), DumpEntry(name='b', expression='x.y'), DumpEntry(name='z', expression='z')]
    """
    entries = []
    for token in _TOKEN_SPLIT_RE.split(text.strip()):
        if not token:
            continue
        name = expression = token
        label = _LABEL_RE.match(token)
        if label:
            name = label.group(1)
            expression = token[label.end():]
        expression = expression.lstrip(CONTAINER_SIGILS)
        if name == token:
            name = expression
        if not expression:
            continue
        entries.append(DumpEntry(name, expression))
    return entries
