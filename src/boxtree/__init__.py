"""
boxtree - Compact ASCII Tree Diagrams

A Python library for laying out trees as boxed labels joined by connector
lines, packed tightly in both directions.

Example:
    >>> from boxtree import render
    >>> print(render([("Root", ("Left",), ("Right",))]), end="")
        +------+
        | Root |
        +---+--+
            |
        +---+----+
        |        |
    +---+--+ +---+---+
    | Left | | Right |
    +------+ +-------+

Debug Mode Example:
    >>> generator = TreeDiagramGenerator()
    >>> diagram = generator.render([("A", ("B",))], debug=True)
    >>> print(generator.get_trace().summary())
"""

from .debug import ShapeInspector, visual_diff
from .generator import TreeDiagramGenerator, layout, render
from .graph import InvalidTreeError, normalize_tree
from .layout import RowBuilder, wrap_text
from .models import Direction, LayoutConfig, Shape, ShapeKind, Symbol, TreeNode
from .renderer import ARROW_CHARS, BOX_CHARS, CAP_CHARS, AsciiCompositor, DrawResult
from .scan import Scan
from .tracer import PipelineStage, RenderTrace, SegmentPlacement

__version__ = "0.1.0"

__all__ = [
    # Main API
    "layout",
    "render",
    "TreeDiagramGenerator",
    "LayoutConfig",
    "InvalidTreeError",
    # Data model
    "Shape",
    "ShapeKind",
    "Direction",
    "Symbol",
    "TreeNode",
    # Pipeline pieces
    "normalize_tree",
    "RowBuilder",
    "wrap_text",
    "Scan",
    # Renderer
    "AsciiCompositor",
    "DrawResult",
    "BOX_CHARS",
    "ARROW_CHARS",
    "CAP_CHARS",
    # Debug/Tracing
    "RenderTrace",
    "PipelineStage",
    "SegmentPlacement",
    "ShapeInspector",
    "visual_diff",
]
