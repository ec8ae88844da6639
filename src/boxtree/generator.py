"""
Main tree diagram generator module.

Combines normalization, row building, spacing, connector planning, packing,
shape emission and compositing to turn a nested tree into an ASCII diagram.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional

from .connectors import ConnectorPlanner
from .emitter import ShapeEmitter
from .graph import normalize_tree
from .layout import RowBuilder
from .models import LayoutConfig, LayoutResult, Row, Shape
from .packing import VerticalPacker
from .positioning import RowSpacer
from .renderer import AsciiCompositor
from .tracer import RenderTrace

logger = logging.getLogger(__name__)


def _describe_rows(rows: List[Row]) -> List[str]:
    return [
        " ".join(f"{node.id}@({node.x},{node.y})" for node in row) for row in rows
    ]


class TreeDiagramGenerator:
    """
    Generate ASCII tree diagrams from nested ``(label, child*)`` structures.

    Example:
        >>> generator = TreeDiagramGenerator()
        >>> print(generator.render([("Root", ("Left",), ("Right",))]))
    """

    def __init__(
        self,
        wrap_threshold: int = 10,
        node_padding: int = 1,
        row_padding: int = 8,
        line_width: int = 1,
        line_padding: int = 1,
        pack: bool = True,
        arrows: bool = False,
        config: Optional[LayoutConfig] = None,
    ):
        """
        Initialize the tree diagram generator.

        Args:
            wrap_threshold: Label characters per box line before wrapping
            node_padding: Horizontal space between neighbouring boxes
            row_padding: Vertical space between rows when packing is off
            line_width: Thickness of connector lines
            line_padding: Space kept around connector lines
            pack: Whether to pack rows upward into unused space
            arrows: Whether to draw arrows where connectors enter children
            config: A ready-made LayoutConfig; overrides the other options
        """
        if config is None:
            config = LayoutConfig(
                wrap_threshold=wrap_threshold,
                node_padding=node_padding,
                row_padding=row_padding,
                line_width=line_width,
                line_padding=line_padding,
                pack=pack,
                arrows=arrows,
            )
        self.config = config
        self.row_builder = RowBuilder(config)
        self.spacer = RowSpacer(config)
        self.connector_planner = ConnectorPlanner(config)
        self.packer = VerticalPacker(config)
        self.emitter = ShapeEmitter(config)
        self._trace: Optional[RenderTrace] = None

    def get_trace(self) -> Optional[RenderTrace]:
        """Trace of the last ``debug=True`` call, if any."""
        return self._trace

    def run(self, tree: Any, debug: bool = False) -> LayoutResult:
        """
        Run the layout pipeline.

        Args:
            tree: A node ``(label, child*)`` or a sequence of nodes
            debug: Record a RenderTrace of every stage

        Returns:
            LayoutResult with the final rows and shapes
        """
        trace = RenderTrace(input_tree=repr(tree)) if debug else None
        self._trace = trace

        roots = normalize_tree(tree)
        logger.debug("normalized %d root(s)", len(roots))
        if trace is not None:
            trace.add_stage("normalize", {"roots": [r.id for r in roots]})

        rows = self.row_builder.build(roots)
        logger.debug(
            "built %d row(s) with %d node(s)", len(rows), sum(len(r) for r in rows)
        )
        if trace is not None:
            trace.add_stage(
                "rows",
                {
                    "rows": [[node.id for node in row] for row in rows],
                    "sizes": [[(n.width, n.height) for n in row] for row in rows],
                },
            )

        rows = self.spacer.space(rows)
        logger.debug("spaced rows, total width %d", self.spacer.total_width)
        if trace is not None:
            trace.add_stage(
                "spacing",
                {"total_width": self.spacer.total_width, "rows": _describe_rows(rows)},
            )

        rows = self.connector_planner.plan(rows)
        logger.debug(
            "planned %d connector(s)", sum(1 for row in rows for n in row if not n.leaf)
        )
        if trace is not None:
            trace.add_stage(
                "connectors",
                {
                    "spans": [
                        (n.id, n.line_left, n.line_right, n.line_y)
                        for row in rows
                        for n in row
                        if not n.leaf
                    ]
                },
            )

        rows = self.packer.pack(rows)
        logger.debug(
            "%s rows, height %d",
            "packed" if self.config.pack else "stacked",
            max(node.bottom for row in rows for node in row),
        )
        if trace is not None:
            boxes = [s for s in self.emitter.emit(rows) if s.text]
            trace.add_stage(
                "packing",
                {"pack": self.config.pack, "rows": _describe_rows(rows)},
                snapshot=AsciiCompositor().render(boxes),
            )

        shapes = self.emitter.emit(rows)
        logger.debug("emitted %d shape(s)", len(shapes))
        if trace is not None:
            trace.add_stage("shapes", {"count": len(shapes)})

        return LayoutResult(
            rows=rows, shapes=shapes, total_width=self.spacer.total_width
        )

    def layout(self, tree: Any, debug: bool = False) -> List[Shape]:
        """Lay out ``tree`` and return the shape list."""
        return self.run(tree, debug=debug).shapes

    def layout_rows(self, tree: Any) -> List[Row]:
        """Lay out ``tree`` and return the positioned rows."""
        return self.run(tree).rows

    def render(self, tree: Any, debug: bool = False) -> str:
        """
        Render ``tree`` as an ASCII diagram.

        Args:
            tree: A node ``(label, child*)`` or a sequence of nodes
            debug: Record a RenderTrace, available from ``get_trace()``

        Returns:
            The diagram, one newline-terminated line per row
        """
        shapes = self.layout(tree, debug=debug)
        compositor = AsciiCompositor(trace=self._trace)
        text = compositor.render(shapes)
        logger.debug("composited %d line(s)", text.count("\n"))
        if self._trace is not None:
            self._trace.add_stage("composite", {"lines": text.count("\n")}, snapshot=text)
        return text

    def save_txt(self, tree: Any, filename: str) -> None:
        """
        Render ``tree`` and save it to a text file.

        Args:
            tree: A node ``(label, child*)`` or a sequence of nodes
            filename: Output filename (should end in .txt)
        """
        output_path = Path(filename)
        output_path.write_text(self.render(tree), encoding="utf-8")


def layout(tree: Any, config: Optional[LayoutConfig] = None) -> List[Shape]:
    """Lay out ``tree`` into integer-coordinate shapes."""
    return TreeDiagramGenerator(config=config).layout(tree)


def render(tree: Any, config: Optional[LayoutConfig] = None) -> str:
    """Render ``tree`` as an ASCII diagram."""
    return TreeDiagramGenerator(config=config).render(tree)
