# src/dotstream/builders/graph_builder.py
"""
將 YAML 圖形文件或邊列表轉換為 NetworkX 圖結構。
"""

# 1. 標準庫導入
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
import networkx as nx
import yaml

# 3. 本專案導入
from dotstream.core.enums import NodeShape, RankDirection
from dotstream.core.exceptions import ProfileError

GRAPH_ATTRIBUTE_KEYS = ("rankdir", "nodesep", "ranksep", "edge_weight")


def build_graph_from_edges(edges: Iterable[Any], directed: bool = True) -> nx.Graph:
    """
    由 (起點, 終點) 配對建立圖；只出現在邊中的節點會被隱式建立。
    """
    G = nx.DiGraph() if directed else nx.Graph()
    for edge in edges:
        if not isinstance(edge, (list, tuple)) or len(edge) != 2:
            raise ProfileError(f"edge must be a [source, target] pair, got {edge!r}")
        u, v = edge
        G.add_edge(str(u), str(v))
    return G


def _coerce_graph_attrs(graph_attrs: dict[str, Any]) -> dict[str, Any]:
    """將圖屬性轉為工作階段接受的型別；不合法的值在開啟任何工作階段前就報錯。"""
    coerced: dict[str, Any] = {}
    for key in GRAPH_ATTRIBUTE_KEYS:
        if key not in graph_attrs:
            continue
        value = graph_attrs[key]
        try:
            coerced[key] = RankDirection(value) if key == "rankdir" else float(value)
        except (TypeError, ValueError) as e:
            raise ProfileError(f"invalid graph attribute {key}={value!r}: {e}") from e
    return coerced


def _coerce_node_attrs(node: str, attrs: Any) -> dict[str, Any]:
    """檢查節點屬性必須是對應表，並將 shape 轉為 NodeShape。"""
    if attrs is None:
        return {}
    if not isinstance(attrs, dict):
        raise ProfileError(f"attributes of node {node!r} must be a mapping, got {type(attrs).__name__}")
    attrs = {str(key): value for key, value in attrs.items()}
    if "shape" in attrs:
        try:
            attrs["shape"] = NodeShape(attrs["shape"])
        except ValueError as e:
            raise ProfileError(f"invalid shape for node {node!r}: {e}") from e
    return attrs


def build_graph_data(document: dict[str, Any]) -> nx.Graph:
    """
    將已解析的圖形文件字典轉換為 NetworkX 圖。

    文件中的 `strict` 與 `graph` 區段會存放在 G.graph 中，
    `nodes` 區段的屬性則成為節點資料。
    """
    if not isinstance(document, dict):
        raise ProfileError(f"graph document must be a mapping, got {type(document).__name__}")

    directed = bool(document.get("directed", True))
    G = build_graph_from_edges(document.get("edges") or [], directed=directed)

    graph_attrs = document.get("graph") or {}
    if not isinstance(graph_attrs, dict):
        raise ProfileError("'graph' section must be a mapping")
    unknown = set(graph_attrs) - set(GRAPH_ATTRIBUTE_KEYS)
    if unknown:
        logging.warning(f"圖形文件含有不支援的圖屬性，已忽略: {sorted(unknown)}")
    G.graph.update(_coerce_graph_attrs(graph_attrs))
    if "strict" in document:
        G.graph["strict"] = bool(document["strict"])

    nodes = document.get("nodes") or {}
    if not isinstance(nodes, dict):
        raise ProfileError("'nodes' section must be a mapping of node name to attributes")
    for node, attrs in nodes.items():
        G.add_node(str(node), **_coerce_node_attrs(str(node), attrs))

    logging.info(f"圖形建構完成：共 {G.number_of_nodes()} 個節點，{G.number_of_edges()} 條邊。")
    return G


def load_graph_document(path: Path) -> nx.Graph:
    """讀取 YAML 圖形文件並建立 NetworkX 圖。"""
    path = Path(path)
    if not path.is_file():
        logging.error(f"圖形文件不存在: {path}")
        raise ProfileError(f"graph document not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logging.error(f"解析圖形文件 '{path.name}' 時發生錯誤: {e}")
        raise ProfileError(f"invalid YAML in graph document {path}: {e}") from e
    return build_graph_data(document or {})
