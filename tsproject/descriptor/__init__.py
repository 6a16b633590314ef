"""
tsproject.descriptor - Synthesized Kdenlive project documents.

Renders the project document for a trim and memoizes the latest rendering
for repeated reads of the virtual file.
"""

from __future__ import annotations
