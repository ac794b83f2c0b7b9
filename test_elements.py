from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from elements import build_network, escape_value, serialize_element
from models import EmptyNetwork, EmptyReason, NetworkPayload, NetworkStyle
from table import Table


def _nodes() -> Table:
    return Table.from_records([{"id": "A", "name": "A"}, {"id": "B", "name": "B"}])


def _edges() -> Table:
    return Table.from_records([{"source": "A", "target": "B"}])


def test_build_network_fills_defaults_for_minimal_tables() -> None:
    result = build_network(_nodes(), _edges())

    assert isinstance(result, NetworkPayload)
    assert result.nodes == (
        "{ data: { id:'A', name:'A', color:'#888888', shape:'ellipse', href:''} }, "
        "{ data: { id:'B', name:'B', color:'#888888', shape:'ellipse', href:''} }"
    )
    assert result.edges == (
        "{ data: { source:'A', target:'B', color:'#888888', sourceShape:'none', targetShape:'triangle'} }"
    )
    assert (result.node_count, result.edge_count) == (2, 1)


def test_build_network_keeps_row_order() -> None:
    ids = ["zeta", "alpha", "mid", "beta"]
    nodes = Table.from_columns({"id": ids, "name": ids})
    result = build_network(nodes, _edges())

    assert isinstance(result, NetworkPayload)
    positions = [result.nodes.index(f"id:'{i}'") for i in ids]
    assert positions == sorted(positions)


def test_build_network_keeps_column_order_and_pass_through_columns() -> None:
    nodes = Table.from_records([{"weight": 3, "id": "A", "shape": "star", "name": "Alpha"}])
    result = build_network(nodes, _edges())

    assert isinstance(result, NetworkPayload)
    assert result.nodes == (
        "{ data: { weight:'3', id:'A', shape:'star', name:'Alpha', color:'#888888', href:''} }"
    )


def test_caller_color_column_wins_over_default() -> None:
    nodes = Table.from_records(
        [{"id": "A", "name": "A", "color": "#ff0000"}, {"id": "B", "name": "B", "color": "#00ff00"}]
    )
    result = build_network(nodes, _edges(), node_color="#123456")

    assert isinstance(result, NetworkPayload)
    assert "#123456" not in result.nodes
    assert "color:'#ff0000'" in result.nodes
    assert "color:'#00ff00'" in result.nodes


def test_caller_edge_color_column_wins_over_default() -> None:
    edges = Table.from_records([{"source": "A", "target": "B", "color": "#ff0000"}])
    own = build_network(_nodes(), edges, edge_color="#123456")
    filled = build_network(_nodes(), _edges(), edge_color="#123456")

    assert isinstance(own, NetworkPayload)
    assert isinstance(filled, NetworkPayload)
    assert "#123456" not in own.edges
    assert "color:'#ff0000'" in own.edges
    assert "color:'#123456'" in filled.edges


def test_style_values_fill_absent_columns() -> None:
    style = NetworkStyle(
        node_color="#111111",
        node_shape="hexagon",
        edge_color="#222222",
        edge_source_shape="circle",
        edge_target_shape="tee",
        node_href="http://example.org",
    )
    result = build_network(_nodes(), _edges(), style)

    assert isinstance(result, NetworkPayload)
    assert result.nodes.count("color:'#111111'") == 2
    assert result.nodes.count("shape:'hexagon'") == 2
    assert result.nodes.count("href:'http://example.org'") == 2
    assert "color:'#222222', sourceShape:'circle', targetShape:'tee'" in result.edges


def test_keyword_overrides_beat_style() -> None:
    result = build_network(_nodes(), _edges(), NetworkStyle(edge_target_shape="tee"), edge_target_shape="vee")

    assert isinstance(result, NetworkPayload)
    assert "targetShape:'vee'" in result.edges


@pytest.mark.parametrize("overrides", [{"nodeColor": "#ff0000"}, {"node_color": None}])
def test_bad_keyword_overrides_raise(overrides) -> None:
    with pytest.raises(ValidationError):
        build_network(_nodes(), _edges(), **overrides)


@pytest.mark.parametrize(
    ("nodes", "edges", "reason"),
    [
        ([], [{"source": "A", "target": "B"}], EmptyReason.NO_NODES),
        ([{"id": "A"}], [{"source": "A", "target": "B"}], EmptyReason.MISSING_NODE_COLUMNS),
        ([{"name": "A"}], [{"source": "A", "target": "B"}], EmptyReason.MISSING_NODE_COLUMNS),
        ([{"id": "A", "name": "A"}], [], EmptyReason.NO_EDGES),
        ([{"id": "A", "name": "A"}], [{"source": "A"}], EmptyReason.MISSING_EDGE_COLUMNS),
        ([{"id": "A", "name": "A"}], [{"target": "A"}], EmptyReason.MISSING_EDGE_COLUMNS),
    ],
)
def test_build_network_reports_empty(nodes, edges, reason) -> None:
    result = build_network(Table.from_records(nodes), Table.from_records(edges))

    assert isinstance(result, EmptyNetwork)
    assert result.kind == "empty"
    assert result.reason is reason


def test_empty_node_table_wins_over_broken_edge_table() -> None:
    result = build_network(Table(["id", "name"]), Table(["unrelated"]))

    assert isinstance(result, EmptyNetwork)
    assert result.reason is EmptyReason.NO_NODES


def test_empty_result_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="elements"):
        build_network(Table(["id", "name"]), _edges())

    assert "no_nodes" in caplog.text


def test_dangling_edge_endpoints_are_not_checked() -> None:
    edges = Table.from_records([{"source": "A", "target": "nowhere"}])
    result = build_network(_nodes(), edges)

    assert isinstance(result, NetworkPayload)
    assert "target:'nowhere'" in result.edges


def test_quotes_are_escaped_by_default() -> None:
    nodes = Table.from_records([{"id": "A", "name": "O'Brien"}])
    result = build_network(nodes, _edges())

    assert isinstance(result, NetworkPayload)
    assert r"name:'O\'Brien'" in result.nodes


def test_escape_can_be_disabled_for_raw_output() -> None:
    nodes = Table.from_records([{"id": "A", "name": "O'Brien"}])
    result = build_network(nodes, _edges(), escape=False)

    assert isinstance(result, NetworkPayload)
    assert "name:'O'Brien'" in result.nodes


def test_escape_value_handles_script_breaking_text() -> None:
    assert escape_value("a\\b") == "a\\\\b"
    assert escape_value("line\nbreak") == "line\\nbreak"
    assert escape_value("</script>") == "<\\/script>"
    assert escape_value("\u2028") == "\\u2028"


def test_serialize_element_renders_none_as_empty() -> None:
    assert serialize_element({"id": "A", "href": None}, ["id", "href"]) == "{ data: { id:'A', href:''} }"
