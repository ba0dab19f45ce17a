"""trace.py - Collect call-stack frames for trace directives.

``collect()`` walks outward from its caller and describes each frame as a
FrameDescriptor, innermost first. Running off the top of the stack simply
ends the walk early.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

TRACE_KEY = "TRACE"

_MODULE_CODE_NAME = "<module>"


@dataclass(frozen=True)
class FrameDescriptor:
    """One frame of a collected trace.

    Attributes:
        unit_name: ``__name__`` of the module the frame executes in.
        source_location: File name of the frame's code.
        line: Line number currently executing in the frame.
        routine_name: Unqualified name of the function active in the frame,
            or None for module-level code.
    """

    unit_name: str
    source_location: str
    line: int
    routine_name: Optional[str] = None

    def as_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "unit_name": self.unit_name,
            "source_location": self.source_location,
            "line": self.line,
        }
        if self.routine_name:
            data["routine_name"] = self.routine_name
        return data


def _routine_name(frame) -> Optional[str]:
    name = frame.f_code.co_name
    if name == _MODULE_CODE_NAME:
        return None
    return name.rsplit(".", 1)[-1]


def collect(depth: int, skip: int = 0) -> List[FrameDescriptor]:
    """Describe up to ``depth`` frames, starting at the caller of ``collect``.

    Args:
        depth: Maximum number of frames to return. Values <= 0 return an
            empty list.
        skip: Extra frames to skip beyond the immediate caller. Wrappers
            pass 1 per layer so that frame 0 is their own caller.

    Returns:
        FrameDescriptors ordered innermost first. Fewer than ``depth`` are
        returned when the stack is shallower.

    Example:
        >>> frames = collect(1)
        >>> frames[0].unit_name == __name__
        True
    """
    frames: List[FrameDescriptor] = []
    frame = inspect.currentframe()
    try:
        frame = frame.f_back if frame is not None else None
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back

        for _ in range(max(depth, 0)):
            if frame is None:
                break
            frames.append(
                FrameDescriptor(
                    unit_name=frame.f_globals.get("__name__", "?"),
                    source_location=frame.f_code.co_filename,
                    line=frame.f_lineno,
                    routine_name=_routine_name(frame),
                )
            )
            frame = frame.f_back
    finally:
        # Break the reference cycle between this frame and the walked frames.
        del frame
    return frames


def trace_payload(frames: List[FrameDescriptor]) -> Dict[str, Any]:
    """Wrap collected frames as the single-entry mapping handed to dumps."""
    return {TRACE_KEY: [f.as_dict() for f in frames]}
