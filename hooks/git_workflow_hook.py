#!/usr/bin/env python3
"""PostToolUse hook — queue git/GitHub workflow events as memories.

Register under PostToolUse with matcher ``Bash``. Reads the hook JSON from
stdin, and appends one record to the memory queue for commits, issue
open/close, PR merges and PR reviews. Always exits 0.

Works from a plain checkout without installing the
package; settings may live in a ``.env`` next to the repo root.
"""

import os
import sys

# Add parent src to path so the hook runs from a plain checkout
_src_path = os.path.join(os.path.dirname(__file__), "..", "src")
if _src_path not in sys.path:
    sys.path.insert(0, _src_path)

from git_workflow_capture.hook import run_hook  # noqa: E402

if __name__ == "__main__":
    run_hook(env_file=os.path.join(os.path.dirname(__file__), "..", ".env"))
