"""
1) Load the family member search payload (first argument, default
   "family_members.json" in the current directory).
2) Scope it to one family line (FAMILY_LINE_ID environment variable).
3) Build the generation-ordered family tree.
4) Build a networkx relationship graph and validate the records.
5) Plot the tree, one rank per generation.
"""

import os
import sys
from pathlib import Path

from graph import build_graph
from models import TreeResult
from parsing import filter_family_line, parse_payload
from plotting import plot_tree
from tree import build_tree
from validation import validate_graph, validate_spouse_links


def load_records(path: Path):
    """Read and decode a saved search payload."""
    return parse_payload(path.read_text(encoding="utf-8"))


def summarize(result: TreeResult) -> list[str]:
    """Overview lines: the headline count, then one line per generation."""
    lines = [f"{result.generation_count} generations • {result.total_member_count} members"]
    for block in result.generations:
        names = []
        for member in block.members:
            if member.spouse is not None:
                names.append(f"{member.display_name} ♥ {member.spouse.display_name}")
            else:
                names.append(member.display_name)
        lines.append(f"Generation {block.level}: {', '.join(names)}")
    return lines


def main(argv: list[str] | None = None):
    # Paths: payload from the command line, or the current directory
    args = sys.argv[1:] if argv is None else argv
    payload_path = Path(args[0]) if args else Path.cwd() / "family_members.json"
    plot_path = payload_path.with_name("family_tree.png")
    family_line_id = os.environ.get("FAMILY_LINE_ID", "")

    print(f"Loading family members: {payload_path}")
    try:
        records = load_records(payload_path)
    except (OSError, ValueError) as e:
        print(f"  Could not load family members: {e}")
        sys.exit(1)
    print(f"  Found {len(records)} members")

    if family_line_id:
        records = filter_family_line(records, family_line_id)
        print(f"  {len(records)} members in family line {family_line_id}")

    print("Building family tree...")
    result = build_tree(records)
    for line in summarize(result):
        print(f"  {line}")

    print("Building NetworkX graph...")
    G = build_graph(records)
    print(f"  Graph has {G.number_of_nodes()} nodes and {G.number_of_edges()} edges")

    print("Validating records...")
    warnings = validate_spouse_links(records) + validate_graph(G)
    if warnings:
        print(f"  Found {len(warnings)} validation warnings:")
        for w in warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(warnings) > 10:
            print(f"    ... and {len(warnings) - 10} more")
    else:
        print("  No validation issues found")

    print(f"Plotting tree to: {plot_path}")
    plot_tree(result, G, plot_path)

    print("Done!")


if __name__ == "__main__":
    main()
