"""
tsproject - Virtual Kdenlive project files for trimming captured streams.

Presents a synthesized Kdenlive project describing one trimmed view of a
captured media stream, buffers the editor's save back into memory and
recovers the cut marks the user chose.
"""

__version__ = "0.1.0"
