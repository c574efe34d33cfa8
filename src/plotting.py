"""Visualization of a generational family tree."""

from pathlib import Path

import networkx as nx
import pydot

from graph import get_parents
from models import DisplayMember, TreeResult


def _member_label(member: DisplayMember) -> str:
    name = member.display_name if member.is_alive else f"{member.display_name} †"
    lines = [name]
    if member.age is not None:
        lines.append(f"{member.age} yrs")
    if member.spouse is not None:
        lines.append(f"♥ {member.spouse.display_name}")
    return "\n".join(lines)


def _unit_ids(result: TreeResult) -> dict[str, str]:
    """Map every rendered person (anchors and attached spouses) to its display unit."""
    units: dict[str, str] = {}
    for block in result.generations:
        for member in block.members:
            units.setdefault(member.id, member.id)
            if member.spouse is not None and member.source.spouse_id:
                units.setdefault(member.source.spouse_id, member.id)
    return units


def build_tree_dot(result: TreeResult, G: nx.DiGraph | None = None) -> pydot.Dot:
    """
    Build a Graphviz chart of the tree: one rank per generation.

    Each display unit is a box with the anchor's name, age and spouse. When
    a relationship graph is given, parent edges are drawn between display
    units, so a child hangs from the couple its parent belongs to.

    Args:
        result: The tree to draw
        G: Optional relationship graph with PARENT_OF edges

    Returns:
        The pydot graph, ready to write
    """
    P = pydot.Dot(graph_type="digraph")
    P.set("rankdir", "TB")  # Top-to-bottom (ancestors at top)
    P.set("nodesep", "0.4")  # Horizontal spacing between nodes
    P.set("ranksep", "0.6")  # Vertical spacing between ranks

    # A repeated person id is drawn once, in the first generation it appears in
    emitted: set[str] = set()
    for block in result.generations:
        sg = pydot.Subgraph(f"generation_{block.level}", rank="same")
        for member in block.members:
            if member.id in emitted:
                continue
            emitted.add(member.id)
            fillcolor = "lightblue" if member.gender_class == "male" else "lightpink"
            node = pydot.Node(
                member.id,
                label=_member_label(member),
                shape="box",
                style="rounded,filled",
                fillcolor=fillcolor,
                fontsize="10",
            )
            P.add_node(node)
            sg.add_node(pydot.Node(member.id))
        P.add_subgraph(sg)

    if G is None:
        return P

    units = _unit_ids(result)
    drawn: set[tuple[str, str]] = set()
    linked: set[str] = set()
    for block in result.generations:
        for member in block.members:
            if member.id in linked:
                continue
            linked.add(member.id)
            # The attached spouse's parents count for the unit too
            people = [member.id]
            if member.spouse is not None and member.source.spouse_id:
                people.append(member.source.spouse_id)

            for person_id in people:
                if person_id not in G:
                    continue
                for parent_id in get_parents(G, person_id):
                    parent_unit = units.get(parent_id)
                    if parent_unit is None or parent_unit == member.id:
                        continue
                    if (parent_unit, member.id) in drawn:
                        continue
                    drawn.add((parent_unit, member.id))
                    P.add_edge(pydot.Edge(parent_unit, member.id, color="darkgray"))

    return P


def plot_tree(result: TreeResult, G: nx.DiGraph | None = None, output_path: Path | None = None):
    """
    Plot the generational tree with the Graphviz hierarchical layout.

    Args:
        result: The tree to draw
        G: Optional relationship graph for parent edges
        output_path: Path to save the output image (PNG). If None, displays interactively.
    """
    P = build_tree_dot(result, G)

    # Render
    if output_path:
        # Determine format from extension
        ext = output_path.suffix.lower().lstrip(".")
        if ext not in ("png", "svg", "pdf", "dot"):
            ext = "png"

        if ext == "dot":
            P.write(str(output_path), format="raw", encoding="utf-8")
        else:
            P.write(str(output_path), format=ext)
        print(f"Tree saved to {output_path}")
    else:
        # Save to temporary file and display
        import tempfile

        import matplotlib.image as mpimg
        import matplotlib.pyplot as plt

        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as f:
            P.write(f.name, format="png")
            img = mpimg.imread(f.name)
            plt.figure(figsize=(20, 16))
            plt.imshow(img)
            plt.axis("off")
            plt.tight_layout()
            plt.show()
