"""
Workspace Sync

Keeps a flat, path-keyed workspace consistent with a GitHub repository using
the Git Data, Contents and Status REST APIs.
"""

__version__ = "0.1.0"
