"""
Debug tracing infrastructure for boxtree.

This module provides data structures for capturing detailed traces of the
tree diagram pipeline. When debug mode is enabled, the generator records
every pipeline stage and the compositor records every run of characters it
draws.

This is primarily useful for:
1. Debugging layout issues (seeing rows and coordinates after each stage)
2. Debugging overlap issues (seeing which shape drew which characters)
3. Writing targeted tests (verifying specific layout decisions)

Usage:
    >>> generator = TreeDiagramGenerator()
    >>> result = generator.render([("A", ("B",))], debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
    >>> trace.dump_to_file("debug_trace.txt")
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SegmentPlacement:
    """
    Record of a run of characters drawn on one output line.

    Attributes:
        x: Column of the first character
        y: Output line
        text: The characters drawn
        kind: Kind of the shape that drew them ("box", "arrow", "cap")
        source: Description of the shape that drew them
    """

    x: int
    y: int
    text: str
    kind: str
    source: str

    def __str__(self) -> str:
        return f"({self.x},{self.y}): '{self.text}' [{self.kind}] from {self.source}"


@dataclass
class PipelineStage:
    """
    Snapshot of state at a pipeline stage.

    The layout pipeline has these stages:
    1. normalize - Assign ids to the input tree
    2. rows - Flatten into rows and size the boxes
    3. spacing - Assign x coordinates
    4. connectors - Compute connector spans and levels
    5. packing - Assign y coordinates
    6. shapes - Emit the shape list
    7. composite - Render the shapes to text

    Attributes:
        name: Name of this pipeline stage
        data: Dictionary of relevant data at this stage
        snapshot: Optional rendered lines at this point
    """

    name: str
    data: Dict[str, Any]
    snapshot: Optional[List[str]] = None

    def __str__(self) -> str:
        lines = [f"=== Stage: {self.name} ==="]
        for key, value in self.data.items():
            str_val = str(value)
            if len(str_val) > 100:
                str_val = str_val[:100] + "..."
            lines.append(f"  {key}: {str_val}")
        if self.snapshot:
            lines.append("  Preview (first 15 rows):")
            for row in self.snapshot[:15]:
                lines.append(f"    |{row}|")
        return "\n".join(lines)


@dataclass
class RenderTrace:
    """
    Complete trace of a render operation.

    Attributes:
        stages: List of pipeline stages with their data
        placements: List of all drawn character runs
        input_tree: repr of the input tree
    """

    stages: List[PipelineStage] = field(default_factory=list)
    placements: List[SegmentPlacement] = field(default_factory=list)
    input_tree: str = ""

    def add_stage(
        self, name: str, data: Dict[str, Any], snapshot: Optional[str] = None
    ) -> None:
        """
        Add a pipeline stage snapshot.

        Args:
            name: Name of the stage (e.g., "packing")
            data: Dictionary of relevant data at this stage
            snapshot: Optional rendered text at this point
        """
        lines = None
        if snapshot is not None:
            lines = snapshot.split("\n")
            if lines and lines[-1] == "":
                lines.pop()
        self.stages.append(PipelineStage(name, data.copy(), lines))

    def add_placement(self, x: int, y: int, text: str, kind: str, source: str) -> None:
        """Record a run of characters drawn by the compositor."""
        self.placements.append(SegmentPlacement(x, y, text, kind, source))

    def get_stage(self, name: str) -> Optional[PipelineStage]:
        """Get a specific pipeline stage by name."""
        for stage in self.stages:
            if stage.name == name:
                return stage
        return None

    def get_placements_at(self, x: int, y: int) -> List[SegmentPlacement]:
        """Get all placements covering a specific cell."""
        return [
            p for p in self.placements if p.y == y and p.x <= x < p.x + len(p.text)
        ]

    def get_placements_by_kind(self, kind: str) -> List[SegmentPlacement]:
        return [p for p in self.placements if p.kind == kind]

    def summary(self) -> str:
        """
        Generate a human-readable summary of the trace.

        Returns a string with the input, the pipeline stages overview and
        placement statistics.
        """
        lines = [
            "=" * 60,
            "RENDER TRACE SUMMARY",
            "=" * 60,
            "",
            f"Input: {self.input_tree[:100]}"
            f"{'...' if len(self.input_tree) > 100 else ''}",
            "",
            f"Pipeline stages: {len(self.stages)}",
        ]

        for stage in self.stages:
            has_snapshot = "+" if stage.snapshot else "-"
            lines.append(f"  [{has_snapshot}] {stage.name}")

        lines.extend(["", f"Total placements: {len(self.placements)}", ""])

        kind_counts: Dict[str, int] = {}
        for p in self.placements:
            kind_counts[p.kind] = kind_counts.get(p.kind, 0) + 1

        lines.append("Placements by kind:")
        for kind, count in sorted(kind_counts.items(), key=lambda x: -x[1]):
            lines.append(f"  {kind}: {count}")

        return "\n".join(lines)

    def dump(self) -> str:
        """
        Generate a complete human-readable dump of the trace.

        Includes all stages with their full data and all placements.
        """
        lines = [self.summary(), "", "=" * 60, "DETAILED TRACE", "=" * 60, ""]

        lines.append("PIPELINE STAGES:")
        lines.append("-" * 40)
        for stage in self.stages:
            lines.append(str(stage))
            lines.append("")

        lines.append("PLACEMENTS:")
        lines.append("-" * 40)
        for p in self.placements:
            lines.append(str(p))

        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        """Write the complete trace dump to a file."""
        with open(filename, "w", encoding="utf-8") as f:
            f.write(self.dump())

    def dump_stage_evolution(self) -> str:
        """Show the rendered snapshot of every stage that has one."""
        lines = [
            "=" * 60,
            "STAGE EVOLUTION",
            "=" * 60,
        ]

        for stage in self.stages:
            if stage.snapshot:
                lines.append("")
                lines.append(f"--- After: {stage.name} ---")
                for row in stage.snapshot:
                    lines.append(f"|{row}|")

        return "\n".join(lines)
