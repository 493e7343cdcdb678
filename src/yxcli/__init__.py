"""
yx-cli - alias expansion and shell completion for the ``yx`` command line client.

File: src/yxcli/__init__.py

Purpose
- Package root. Defines package-level metadata; keep imports light.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from yxcli.constants import VERSION

__version__ = VERSION

__all__ = ["__version__"]
