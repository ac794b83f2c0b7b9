from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal, Optional, Union

class NetworkStyle(BaseModel):
    """Table-wide fill values, used only for columns the tables do not carry."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    node_color: str = "#888888"
    node_shape: str = "ellipse"
    edge_color: str = "#888888"
    edge_source_shape: str = "none"
    edge_target_shape: str = "triangle"
    node_href: str = ""

class NetworkPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["network"] = "network"
    nodes: str
    edges: str
    node_count: int = 0
    edge_count: int = 0

class EmptyReason(str, Enum):
    NO_NODES = "no_nodes"
    MISSING_NODE_COLUMNS = "missing_node_columns"
    NO_EDGES = "no_edges"
    MISSING_EDGE_COLUMNS = "missing_edge_columns"

class EmptyNetwork(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["empty"] = "empty"
    reason: EmptyReason
    detail: str = ""

BuildResult = Union[NetworkPayload, EmptyNetwork]

class EmptyNetworkError(ValueError):
    """Raised by the convenience renderers when the builder reports no network."""

    def __init__(self, result: EmptyNetwork):
        super().__init__(result.detail or result.reason.value)
        self.result = result

class NetworkRequest(BaseModel):
    nodes: List[Dict[str, Any]] = Field(default_factory=list)
    edges: List[Dict[str, Any]] = Field(default_factory=list)
    style: NetworkStyle = Field(default_factory=NetworkStyle)
    layout: Optional[str] = None
    stand_alone: bool = True
    title: Optional[str] = None
