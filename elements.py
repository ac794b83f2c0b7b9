import logging
from typing import Any, Mapping, Optional, Sequence

from models import BuildResult, EmptyNetwork, EmptyReason, NetworkPayload, NetworkStyle
from table import Table, cell_text

LOGGER = logging.getLogger(__name__)

NODE_REQUIRED = ("id", "name")
EDGE_REQUIRED = ("source", "target")

_ESCAPES = (
    ("\\", "\\\\"),
    ("'", "\\'"),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\u2028", "\\u2028"),
    ("\u2029", "\\u2029"),
    ("</", "<\\/"),
)

def escape_value(text: str) -> str:
    """Make a cell safe inside a single-quoted JS literal within a <script> tag."""
    for raw, escaped in _ESCAPES:
        text = text.replace(raw, escaped)
    return text

def serialize_element(row: Mapping[str, Any], columns: Sequence[str], escape: bool = True) -> str:
    """
    One row -> `{ data: { col:'value', ...} }`, fields in column order.
    No space before the closing braces; the text is compared literally downstream.
    """
    fields = []
    for col in columns:
        value = cell_text(row.get(col))
        if escape:
            value = escape_value(value)
        fields.append(f"{col}:'{value}'")
    return "{ data: { " + ", ".join(fields) + "} }"

def serialize_elements(table: Table, escape: bool = True) -> str:
    return ", ".join(serialize_element(row, table.columns, escape) for row in table.rows)

def fill_node_defaults(table: Table, style: NetworkStyle) -> Table:
    return (
        table.with_default_column("color", style.node_color)
        .with_default_column("shape", style.node_shape)
        .with_default_column("href", style.node_href)
    )

def fill_edge_defaults(table: Table, style: NetworkStyle) -> Table:
    return (
        table.with_default_column("color", style.edge_color)
        .with_default_column("sourceShape", style.edge_source_shape)
        .with_default_column("targetShape", style.edge_target_shape)
    )

def check_tables(node_table: Table, edge_table: Table) -> Optional[EmptyNetwork]:
    # presence checks only; dangling endpoints and duplicate ids are the renderer's problem
    if node_table.num_rows == 0:
        return EmptyNetwork(reason=EmptyReason.NO_NODES, detail="node table has no rows")
    if not node_table.has_columns(*NODE_REQUIRED):
        missing = [c for c in NODE_REQUIRED if c not in node_table.columns]
        return EmptyNetwork(
            reason=EmptyReason.MISSING_NODE_COLUMNS,
            detail=f"node table is missing column(s): {', '.join(missing)}",
        )
    if edge_table.num_rows == 0:
        return EmptyNetwork(reason=EmptyReason.NO_EDGES, detail="edge table has no rows")
    if not edge_table.has_columns(*EDGE_REQUIRED):
        missing = [c for c in EDGE_REQUIRED if c not in edge_table.columns]
        return EmptyNetwork(
            reason=EmptyReason.MISSING_EDGE_COLUMNS,
            detail=f"edge table is missing column(s): {', '.join(missing)}",
        )
    return None

def build_network(
    node_table: Table,
    edge_table: Table,
    style: Optional[NetworkStyle] = None,
    escape: bool = True,
    **overrides: str,
) -> BuildResult:
    """
    Turns the node/edge tables into Cytoscape.js element text.

    `overrides` takes the NetworkStyle field names (node_color, edge_target_shape, ...)
    and wins over `style`; an unknown name or a non-string value raises
    pydantic.ValidationError. Returns EmptyNetwork instead of raising when
    either table is empty or lacks its required columns.
    """
    style = style or NetworkStyle()
    if overrides:
        style = NetworkStyle(**{**style.model_dump(), **overrides})

    empty = check_tables(node_table, edge_table)
    if empty is not None:
        LOGGER.warning("network not built: %s (%s)", empty.reason.value, empty.detail)
        return empty

    nodes = fill_node_defaults(node_table, style)
    edges = fill_edge_defaults(edge_table, style)

    payload = NetworkPayload(
        nodes=serialize_elements(nodes, escape),
        edges=serialize_elements(edges, escape),
        node_count=nodes.num_rows,
        edge_count=edges.num_rows,
    )
    LOGGER.info("network built: %d nodes, %d edges", payload.node_count, payload.edge_count)
    return payload

def build_from_records(
    nodes: Sequence[Mapping[str, Any]],
    edges: Sequence[Mapping[str, Any]],
    style: Optional[NetworkStyle] = None,
    escape: bool = True,
) -> BuildResult:
    return build_network(Table.from_records(nodes), Table.from_records(edges), style, escape)
