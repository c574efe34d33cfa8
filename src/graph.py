"""NetworkX graph building from family records."""

from typing import Iterable

import networkx as nx

from models import PersonRecord
from tree import normalize_generation


def build_graph(records: Iterable[PersonRecord]) -> nx.DiGraph:
    """
    Build a NetworkX directed graph of the recorded relationships.

    PARENT_OF edges go from mother/father to child, SPOUSE_OF edges from a
    person to the spouse they name. References to unknown ids and to the
    person themselves add no edge. When an id repeats, the first record wins.
    """
    G = nx.DiGraph()
    records = list(records)

    # Add nodes (persons)
    # Note: use 'person_name' instead of 'name' to avoid conflict with pydot
    for r in records:
        if r.person_id in G:
            continue
        G.add_node(
            r.person_id,
            person_name=r.first_name,
            sex=r.gender,
            generation=normalize_generation(r.generation),
            birth_date=r.birth_date,
            death_date=r.death_date,
        )

    # Add edges (relationships)
    for r in records:
        for role, parent_id in (("mother", r.mother_id), ("father", r.father_id)):
            if parent_id and parent_id != r.person_id and parent_id in G:
                G.add_edge(
                    parent_id, r.person_id, relationship_type="PARENT_OF", parent_role=role
                )

        spouse_id = r.spouse_id
        if spouse_id and spouse_id != r.person_id and spouse_id in G:
            # Keep an existing PARENT_OF edge between the pair
            if not G.has_edge(r.person_id, spouse_id):
                G.add_edge(r.person_id, spouse_id, relationship_type="SPOUSE_OF")

    return G


def get_parents(G: nx.DiGraph, person_id: str) -> list[str]:
    """Parents of a person, in the order their edges were added."""
    return [
        p
        for p in G.predecessors(person_id)
        if G.edges[p, person_id].get("relationship_type") == "PARENT_OF"
    ]
