"""Export graph snapshots to DOT (Graphviz) and Mermaid text."""

from dashplus.models import GraphNode, GraphSnapshot

LABEL_LENGTH = 30

NODE_COLORS = {
    "active": "lightblue",
    "completed": "lightgreen",
    "waiting": "lightyellow",
    "cancelled": "lightgray",
}

EDGE_STYLES = {
    "waiting": "style=dashed, color=orange",
    "blocks": "style=bold, color=red",
    "delegated": "style=dotted, color=blue",
    "references": "style=solid, color=gray",
    "moved": "style=solid, color=purple",
    "related": "style=solid, color=black",
    "project": "style=dotted, color=darkgreen",
}

MERMAID_ARROWS = {
    "waiting": "-.->",
    "blocks": "==>",
    "delegated": "-->",
    "references": "-->",
    "moved": "==>",
    "related": "---",
    "project": "-.-",
}


def _label(node: GraphNode) -> str:
    return f"{node.symbol} {node.content[:LABEL_LENGTH]}"


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def get_node_color(status: str) -> str:
    """Fill color for a task status."""
    return NODE_COLORS.get(status, "white")


def to_dot(graph: GraphSnapshot) -> str:
    """Render a graph snapshot as a Graphviz digraph."""
    lines = [
        "digraph TaskGraph {",
        "  rankdir=LR;",
        "  node [shape=box];",
        "",
    ]

    for node in graph.nodes:
        shape = ", shape=ellipse" if node.type == "project" else ""
        lines.append(
            f'  "{_dot_escape(node.id)}" [label="{_dot_escape(_label(node))}", style=filled, '
            f'fillcolor="{get_node_color(node.status)}"{shape}];'
        )

    lines.append("")

    for edge in graph.edges:
        attributes = []
        if edge.link_type in EDGE_STYLES:
            attributes.append(EDGE_STYLES[edge.link_type])
        if edge.label:
            attributes.append(f'label="{_dot_escape(edge.label)}"')
        suffix = f" [{', '.join(attributes)}]" if attributes else ""
        lines.append(f'  "{_dot_escape(edge.source)}" -> "{_dot_escape(edge.target)}"{suffix};')

    lines.append("}")
    return "\n".join(lines) + "\n"


def to_mermaid(graph: GraphSnapshot) -> str:
    """Render a graph snapshot as a Mermaid flowchart."""
    lines = ["graph LR"]

    for node in graph.nodes:
        # Mermaid has no escape for double quotes inside labels
        label = _label(node).replace('"', "'")
        lines.append(f'  {node.id}["{label}"]')

    for edge in graph.edges:
        arrow = MERMAID_ARROWS.get(edge.link_type, "-->")
        lines.append(f"  {edge.source} {arrow} {edge.target}")

    return "\n".join(lines) + "\n"
