"""Tree and batch sanitizers."""
from __future__ import annotations

from blocksan.sanitizer.blocks import BlockSanitizer
from blocksan.sanitizer.tree import TreeSanitizer

__all__ = ["BlockSanitizer", "TreeSanitizer"]
