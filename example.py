from typing import Tuple
from table import Table

# Small four-person network used by the demo endpoint and the smoke check.
EXAMPLE_IDS = ["Jerry", "Elaine", "Kramer", "George"]

EXAMPLE_SOURCES = ["Jerry", "Jerry", "Jerry", "Elaine", "Elaine", "Kramer", "Kramer", "Kramer", "George"]
EXAMPLE_TARGETS = ["Elaine", "Kramer", "George", "Jerry", "Kramer", "Jerry", "Elaine", "George", "Jerry"]

def example_tables() -> Tuple[Table, Table]:
    nodes = Table.from_columns({"id": EXAMPLE_IDS, "name": list(EXAMPLE_IDS)})
    edges = Table.from_columns({"source": EXAMPLE_SOURCES, "target": EXAMPLE_TARGETS})
    return nodes, edges
