"""examples/basic_usage.py - Activate directives for a script.

Demonstrates:
    - Activating tags by name
    - A tag with a backtrace and its own output format
    - Enabling exec directives

Run:
    python examples/basic_usage.py
"""

import logging
import os

from debugcomments import run_path

logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

SCRIPT = os.path.join(os.path.dirname(__file__), "payment.py")

# "pay" directives print to stderr; "db" dumps are YAML with a 2-frame trace.
# "pay" is listed first, so "##[pay, db]" lines use the "pay" options.
run_path(
    SCRIPT,
    show=["pay", {"tag": "db", "trace": 2, "format": "yaml"}],
    exec_enabled=True,
)
