"""debugcomments/__init__.py - Public API for the debugcomments package.

debugcomments turns specially tagged comments into debug output. Directives
are ordinary comments until their tag is activated, so they cost nothing in
normal runs:

    ##[dbg,net] connecting            # message
    ##[dbg]= host, port, opts:cfg     # dump named values
    ##[net]~ dump_socket_state()      # exec (only when exec is enabled)

Quick start:
    from debugcomments import run_path

    # Activate "dbg" and trace two frames after each "net" directive
    run_path("script.py", show=["dbg", {"tag": "net", "trace": 2}])

    # Or read settings (JSON object text or a JSON file path) from $MYDEBUG
    run_path("script.py", env="MYDEBUG")

Exported names:
    rewrite:         Rewrite directive lines in source text for a tag list.
    filter_source:   Resolve options and rewrite source text.
    run_source:      Rewrite, compile and execute source text.
    run_path:        Rewrite and execute a Python file as ``__main__``.
    resolve_config:  Normalise options into a Config.
    TagDescriptor:   One active tag and its output options.
    Config:          Resolved settings for a rewrite pass.
    ConfigError:     Raised for malformed settings.
    emit:            Write a message to stderr or append it to a file.
    emit_structured: Render a mapping as data/json/yaml and emit it.
    collect:         Describe frames of the current call stack.
    debug_msg, debug_dump, debug_trace:
                     Call targets used by rewritten directives.
"""

from .config import Config, ConfigError, TagDescriptor, resolve_config
from .dispatch import debug_dump, debug_msg, debug_trace, emit, emit_structured
from .rewriter import rewrite
from .runner import filter_source, run_path, run_source
from .trace import FrameDescriptor, collect

__all__ = [
    "Config",
    "ConfigError",
    "TagDescriptor",
    "resolve_config",
    "rewrite",
    "filter_source",
    "run_source",
    "run_path",
    "emit",
    "emit_structured",
    "debug_msg",
    "debug_dump",
    "debug_trace",
    "collect",
    "FrameDescriptor",
]
__version__ = "0.1.0"
