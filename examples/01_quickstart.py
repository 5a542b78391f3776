#!/usr/bin/env python3
"""Example: Quickstart — blocksan

Sanitize a saved document with the built-in tools, then clean a single
string with explicit rules.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install blocksan
"""
from __future__ import annotations

import json

import blocksan

DOCUMENT = {
    "blocks": [
        {"tool": "header", "data": {"text": "<b>Weekly</b> update", "level": 2}},
        {
            "tool": "paragraph",
            "data": {
                "text": '<script>track()</script>Read <a href="https://example.com" '
                'onclick="x()">the notes</a>, <i>please</i>.',
            },
        },
        {"tool": "list", "data": {"style": "ordered", "items": ["one<br>line", "<u>two</u>"]}},
    ],
}


def main() -> None:
    print(f"blocksan version: {blocksan.__version__}")

    # Step 1: sanitize every block in place
    blocksan.sanitize_blocks(DOCUMENT["blocks"])
    print(json.dumps(DOCUMENT, indent=2))

    # Step 2: clean one string with explicit rules
    print(blocksan.clean('<a href="javascript:x()" title="t">link</a>', {"a": {"title": True}}))


if __name__ == "__main__":
    main()
