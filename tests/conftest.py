"""Pytest configuration.

Puts the repository root on ``sys.path`` so the top-level ``fiblib`` and
``tester`` modules import without an install.
"""

import sys
from pathlib import Path

repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))
