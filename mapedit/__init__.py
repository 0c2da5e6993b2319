"""
mapedit - interactive modify control for vector map features.

Subpackages:
- mapedit.map: in-memory map primitives (features, sources, interactions, viewport)
- mapedit.edit: the modify control, its controller and cursor feedback
- mapedit.styles: style normalization and select-style compositing
"""

__version__ = "0.1.0"
