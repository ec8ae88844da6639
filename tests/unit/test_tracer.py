"""Unit tests for the render trace."""

from boxtree.tracer import PipelineStage, RenderTrace, SegmentPlacement


class TestSegmentPlacement:
    """Tests for SegmentPlacement."""

    def test_str(self):
        """Test the readable form names position, text and kind."""
        placement = SegmentPlacement(3, 1, "+-+", "box", "Shape(...)")
        assert str(placement) == "(3,1): '+-+' [box] from Shape(...)"


class TestPipelineStage:
    """Tests for PipelineStage."""

    def test_str_truncates_long_values(self):
        """Test long data values are cut in the readable form."""
        stage = PipelineStage("rows", {"ids": list(range(100))})
        text = str(stage)
        assert text.startswith("=== Stage: rows ===")
        assert text.endswith("...")

    def test_str_with_snapshot(self):
        """Test the snapshot preview is framed."""
        stage = PipelineStage("composite", {}, ["+-+"])
        assert "    |+-+|" in str(stage)


class TestRenderTrace:
    """Tests for RenderTrace."""

    def test_add_stage_splits_snapshot(self):
        """Test snapshots are stored as lines without a trailing blank."""
        trace = RenderTrace()
        trace.add_stage("composite", {"lines": 2}, snapshot="ab\ncd\n")
        assert trace.get_stage("composite").snapshot == ["ab", "cd"]

    def test_add_stage_copies_data(self):
        """Test later changes to the data dict do not leak into the trace."""
        trace = RenderTrace()
        data = {"count": 1}
        trace.add_stage("shapes", data)
        data["count"] = 2
        assert trace.get_stage("shapes").data == {"count": 1}

    def test_get_missing_stage(self):
        """Test unknown stage names return None."""
        assert RenderTrace().get_stage("nope") is None

    def test_placements_at(self):
        """Test lookups find runs covering a cell."""
        trace = RenderTrace()
        trace.add_placement(0, 0, "+--", "box", "a")
        trace.add_placement(3, 0, "+", "box", "b")
        trace.add_placement(0, 1, "|", "box", "a")
        assert [p.source for p in trace.get_placements_at(2, 0)] == ["a"]
        assert [p.source for p in trace.get_placements_at(3, 0)] == ["b"]
        assert trace.get_placements_at(4, 0) == []

    def test_placements_by_kind(self):
        """Test filtering placements by shape kind."""
        trace = RenderTrace()
        trace.add_placement(0, 0, "+-+", "box", "a")
        trace.add_placement(1, 3, "V", "arrow", "b")
        assert [p.text for p in trace.get_placements_by_kind("arrow")] == ["V"]

    def test_summary(self):
        """Test the summary lists stages and placement counts."""
        trace = RenderTrace(input_tree="[('A',)]")
        trace.add_stage("rows", {})
        trace.add_stage("composite", {}, snapshot="+\n")
        trace.add_placement(0, 0, "+", "box", "a")
        summary = trace.summary()
        assert "RENDER TRACE SUMMARY" in summary
        assert "Input: [('A',)]" in summary
        assert "[-] rows" in summary
        assert "[+] composite" in summary
        assert "Placements by kind:" in summary
        assert "  box: 1" in summary

    def test_dump_to_file(self, tmp_path):
        """Test the full dump is written to disk."""
        trace = RenderTrace()
        trace.add_stage("shapes", {"count": 3})
        trace.add_placement(0, 0, "+", "box", "a")
        path = tmp_path / "trace.txt"
        trace.dump_to_file(str(path))
        content = path.read_text(encoding="utf-8")
        assert "DETAILED TRACE" in content
        assert "count: 3" in content
        assert "(0,0): '+' [box] from a" in content

    def test_stage_evolution(self):
        """Test only stages with snapshots appear in the evolution view."""
        trace = RenderTrace()
        trace.add_stage("rows", {})
        trace.add_stage("packing", {}, snapshot="+-+\n")
        evolution = trace.dump_stage_evolution()
        assert "--- After: packing ---" in evolution
        assert "|+-+|" in evolution
        assert "After: rows" not in evolution
