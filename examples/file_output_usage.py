"""examples/file_output_usage.py - Send debug output to files, driven by env.

Settings come from the DEBUGCOMMENTS environment variable, either a JSON
object or a path to a JSON file. Without it, the script runs with every
directive inert.

Run:
    DEBUGCOMMENTS='{"show": ["pay", {"tag": "db", "output": "/tmp/debugcomments/db.log"}], "format": "json"}' \
        python examples/file_output_usage.py
    cat /tmp/debugcomments/db.log
"""

import os

from debugcomments import filter_source, run_path

SCRIPT = os.path.join(os.path.dirname(__file__), "payment.py")

# Show what the interpreter will see.
with open(SCRIPT, encoding="utf-8") as f:
    print(filter_source(f.read(), env="DEBUGCOMMENTS"))

run_path(SCRIPT, env="DEBUGCOMMENTS")
