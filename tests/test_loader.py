"""
Unit tests for loading and exporting web topologies.
"""

import msgpack
import pytest

from spiderweb import build, dump, find_path
from spiderweb.data import load_link_graph, load_web, parse_lines, save_link_graph
from spiderweb.errors import ParseError


class TestParseLines:
    """Test adjacency text parsing."""

    def test_colon_format(self):
        """`name: a b` lines link the name to each neighbor."""
        web = parse_lines(["jqt: rhn xhk nvd", "rsh: frs pzl lsr"])
        assert len(web) == 8
        assert web.edge_count() == 6
        assert web.has_edge(web.ident("jqt"), web.ident("nvd"))

    def test_space_format(self, cycle_lines):
        """Lines without a colon parse the same way."""
        colon = build(cycle_lines)
        spaced = build([line.replace(":", "") for line in cycle_lines])
        assert dump(colon) == dump(spaced)

    def test_edges_are_bidirectional(self):
        """A link declared once is usable both ways."""
        web = build(["a: b"])
        assert find_path(web, "b", "a").path == ["b", "a"]

    def test_ids_follow_first_sight(self, cycle_web):
        """Identifiers are issued in reading order."""
        assert [cycle_web.get_name(i) for i in cycle_web.nodes()] == list("ABDCEFHI")

    def test_blank_and_comment_lines(self):
        """Blank lines and # comments are skipped."""
        web = build(["# header", "", "a: b", "   ", "# a: c"])
        assert len(web) == 2
        assert "c" not in web

    def test_isolated_node(self):
        """A source with no neighbors is still a node."""
        web = build(["a:", "b: c"])
        assert "a" in web
        assert web.neighbors(web.ident("a")) == ()

    def test_duplicates_and_self_links(self, caplog):
        """Repeated links and self-links are ignored with a warning."""
        web = build(["a: b a", "b: a"])
        assert web.edge_count() == 1
        assert "self-link" in caplog.text
        assert "duplicate link" in caplog.text

    def test_missing_source_raises(self):
        """A line with nothing before the colon is rejected with its number."""
        with pytest.raises(ParseError) as excinfo:
            build(["a: b", ": c d"])
        assert excinfo.value.line_number == 2
        assert "line 2" in str(excinfo.value)

    def test_extends_existing_web(self, cycle_web):
        """Parsing into an existing web adds to it."""
        parse_lines(["I: J"], web=cycle_web)
        assert find_path(cycle_web, "A", "J").hops == 5


class TestDump:
    """Test topology exports."""

    def test_text_round_trip(self, cycle_web):
        """Text dumps read back into the same topology."""
        text = dump(cycle_web)
        rebuilt = build(text.splitlines())
        assert dump(rebuilt) == text
        assert rebuilt.edge_count() == cycle_web.edge_count()

    def test_text_lists_each_edge_once(self, cycle_web):
        """Every edge appears exactly once in the text dump."""
        text = dump(cycle_web)
        pairs = [
            frozenset((line.split(":")[0], other))
            for line in text.splitlines()
            for other in line.split(":")[1].split()
        ]
        assert len(pairs) == len(set(pairs)) == 10

    def test_text_keeps_isolated_nodes(self):
        """Isolated nodes survive a dump round trip."""
        web = build(["a: b", "lonely"])
        assert "lonely:" in dump(web).splitlines()

    def test_graphviz(self, cycle_web):
        """Graphviz dumps count routes across each edge."""
        find_path(cycle_web, "A", "I")
        text = dump(cycle_web, fmt="graphviz")
        a, b = cycle_web.ident("A"), cycle_web.ident("B")
        assert f'"{a}" -> "{b}" [label = "up 2 dn 2"];' in text

    def test_unknown_format(self, cycle_web):
        """Unknown formats are rejected."""
        with pytest.raises(ValueError, match="Unknown dump format"):
            dump(cycle_web, fmt="svg")


class TestLinkGraphFiles:
    """Test msgpack and text files on disk."""

    def test_msgpack_round_trip(self, cycle_web, tmp_path):
        """Saved link graphs load back with the same topology."""
        path = tmp_path / "web.msgpack"
        save_link_graph(cycle_web, path)
        loaded = load_web(path)
        assert dump(loaded) == dump(cycle_web)

    def test_msgpack_stores_no_routes(self, cycle_web, tmp_path):
        """Only topology is written, never route hints."""
        find_path(cycle_web, "A", "I")
        path = tmp_path / "web.msgpack"
        save_link_graph(cycle_web, path)
        assert load_link_graph(path).cached_route_count() == 0

    def test_msgpack_bad_shape(self, tmp_path):
        """Files that are not a name map raise ParseError."""
        path = tmp_path / "bad.msgpack"
        path.write_bytes(msgpack.packb([1, 2, 3]))
        with pytest.raises(ParseError):
            load_link_graph(path)

    def test_text_file(self, cycle_lines, tmp_path):
        """Adjacency text files load by default."""
        path = tmp_path / "web.txt"
        path.write_text("\n".join(cycle_lines) + "\n", encoding="utf-8")
        web = load_web(path)
        assert find_path(web, "A", "I").hops == 4

    def test_bundled_sample(self, project_root):
        """The sample web under data/ loads and validates."""
        web = load_web(project_root / "data" / "web.txt")
        assert all(web.validate().values())
        assert web.edge_count() == 10

    def test_bundled_sample_is_found(self):
        """The default adjacency file is reported present."""
        from spiderweb.config import get_missing_data_files, validate_data_files

        assert validate_data_files()["web"] is True
        assert "web" not in get_missing_data_files()
