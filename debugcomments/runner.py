"""runner.py - Filter Python source and run it with directives active.

This is the glue between option resolution, the rewriter and the Python
interpreter:

    filter_source(text, show=["dbg"])         # rewritten text only
    run_source(text, show=["dbg"])            # rewrite, compile, exec
    run_path("script.py", env="MYDEBUG")      # same, for a file on disk

When the options resolve to no active tags (for instance ``env`` names an
unset variable), the source is executed unchanged and directives stay inert
comments.
"""

import logging
from typing import Any, Dict, Optional

from .config import Config, resolve_config
from .rewriter import rewrite

logger = logging.getLogger(__name__)


def filter_source(text: str, config: Optional[Config] = None, **options: Any) -> str:
    """Return ``text`` with active directives rewritten.

    Args:
        text: Python source text.
        config: A resolved Config. When omitted, ``options`` are passed to
            ``resolve_config()``.
        **options: Keyword options accepted by ``resolve_config()``.

    Raises:
        ConfigError: If ``options`` cannot be resolved.
    """
    if config is None:
        config = resolve_config(**options)
    if config is None:
        return text
    return rewrite(text, config.tags, config.exec_enabled)


def run_source(
    text: str,
    filename: str = "<debugcomments>",
    namespace: Optional[Dict[str, Any]] = None,
    config: Optional[Config] = None,
    **options: Any,
) -> Dict[str, Any]:
    """Filter ``text`` and execute it in ``namespace``.

    Line numbers in tracebacks and traces match the original source.

    Returns:
        The namespace the code ran in.
    """
    if namespace is None:
        namespace = {"__name__": "__debugcomments__"}
    code = compile(filter_source(text, config=config, **options), filename, "exec")
    exec(code, namespace)
    return namespace


def run_path(path: str, config: Optional[Config] = None, **options: Any) -> Dict[str, Any]:
    """Read a Python file, filter it and run it as ``__main__``."""
    with open(path, encoding="utf-8") as f:
        text = f.read()
    logger.debug("running %s with debugging comments", path)
    namespace = {"__name__": "__main__", "__file__": path}
    return run_source(text, filename=path, namespace=namespace, config=config, **options)
