"""
Store package.

Re-exports the file-backed form store used by the pipeline.
"""

from __future__ import annotations

from .yaml_store import FormStore

__all__ = ["FormStore"]
