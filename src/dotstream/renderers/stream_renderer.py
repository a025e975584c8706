# src/dotstream/renderers/stream_renderer.py
"""
將 NetworkX 圖逐行串流到 DotSession。
"""

# 1. 標準庫導入
import logging

# 2. 第三方庫導入
import networkx as nx

# 3. 本專案導入
from dotstream.core.enums import GraphKind
from dotstream.core.session import DotSession


def _group_clusters(G: nx.Graph) -> dict[str, list[str]]:
    """依節點的 `cluster` 屬性分組，保留首次出現的順序。"""
    clusters: dict[str, list[str]] = {}
    for node, cluster in G.nodes(data="cluster"):
        if cluster is not None:
            clusters.setdefault(str(cluster), []).append(node)
    return clusters


def stream_graph(session: DotSession, G: nx.Graph) -> dict[str, int]:
    """
    依序寫出圖屬性、子圖、節點屬性與邊。

    Args:
        session: 已開啟的工作階段；本函式不會關閉它。
        G: 要輸出的圖，圖屬性取自 G.graph (rankdir, nodesep, ranksep, edge_weight)。

    Returns:
        已寫出的節點、邊與子圖數量。
    """
    if G.is_directed() != (session.graph_kind is GraphKind.DIRECTED):
        logging.warning("圖的方向性與工作階段的圖種類不一致，將依工作階段的連線符號輸出。")

    if "rankdir" in G.graph:
        session.set_rank_dir(G.graph["rankdir"])
    if "nodesep" in G.graph:
        session.set_node_sep(float(G.graph["nodesep"]))
    if "ranksep" in G.graph:
        session.set_rank_sep(float(G.graph["ranksep"]))
    if "edge_weight" in G.graph:
        session.set_edge_weight(float(G.graph["edge_weight"]))

    clusters = _group_clusters(G)
    for name, members in clusters.items():
        session.create_cluster(name, members)

    for node, attrs in G.nodes(data=True):
        if "label" in attrs:
            session.set_label(node, str(attrs["label"]))
        if "shape" in attrs:
            session.set_node_shape(node, attrs["shape"])

    for u, v in G.edges():
        session.set_link(u, v)

    stats = {"nodes": G.number_of_nodes(), "edges": G.number_of_edges(), "clusters": len(clusters)}
    logging.info(f"已串流 {stats['nodes']} 個節點、{stats['edges']} 條邊、{stats['clusters']} 個子圖。")
    return stats
