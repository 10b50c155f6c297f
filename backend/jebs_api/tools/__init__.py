# Tools package init
"""
Jeb's API — Offline Build Tools
================================

What:  Commands run by hand at build time, never inside the request lifecycle.

Tool Inventory:
    - logo_outline.py: `jebs-logo`, traces logo bitmaps into white SVG
      outlines using ImageMagick (`magick`) and `potrace`
"""
