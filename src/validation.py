"""Data-quality checks for family records."""

from typing import Iterable

import networkx as nx

from models import FEMALE, MALE, PersonRecord
from tree import gender_class, normalize_generation


def validate_graph(G: nx.DiGraph) -> list[str]:
    """
    Check the parent links against the generational layout:
    - A child must sit in a later generation than each parent
      (a parent/child loop always fails this, so it needs no separate check)
    - motherId should point to a female-coded record, fatherId to a male-coded one
    - A death year before the birth year would show a negative age

    Returns a list of warning messages.
    """
    warnings: list[str] = []

    for parent, child, data in G.edges(data=True):
        if data.get("relationship_type") != "PARENT_OF":
            continue

        parent_data = G.nodes[parent]
        child_data = G.nodes[child]
        parent_gen = parent_data.get("generation", 1)
        child_gen = child_data.get("generation", 1)

        if child_gen <= parent_gen:
            warnings.append(
                f"Misplaced: {child} (generation {child_gen}) is not below parent "
                f"{parent} (generation {parent_gen})"
            )

        role = data.get("parent_role")
        parent_class = gender_class(parent_data.get("sex"))
        if (role == "mother" and parent_class != FEMALE) or (
            role == "father" and parent_class != MALE
        ):
            warnings.append(
                f"Mismatch: {parent} is recorded as the {role} of {child} "
                f"but is coded {parent_class}"
            )

    for node, data in G.nodes(data=True):
        birth = data.get("birth_date")
        death = data.get("death_date")
        if birth and death and death[:4] < birth[:4]:
            warnings.append(f"Impossible: {node} died in {death[:4]}, before birth in {birth[:4]}")

    return warnings


def validate_spouse_links(records: Iterable[PersonRecord]) -> list[str]:
    """
    Report spouse references the tree cannot pair as recorded:
    duplicate ids, dangling or self references, one-sided links and spouses
    recorded in another generation.

    Returns a list of warning messages.
    """
    warnings: list[str] = []
    records = list(records)

    lookup: dict[str, PersonRecord] = {}
    for r in records:
        if r.person_id in lookup:
            warnings.append(f"Duplicate person id {r.person_id}: later record ignored for lookups")
            continue
        lookup[r.person_id] = r

    for r in records:
        if not r.spouse_id:
            continue

        if r.spouse_id == r.person_id:
            warnings.append(f"Invalid: {r.person_id} is recorded as their own spouse")
            continue

        spouse = lookup.get(r.spouse_id)
        if spouse is None:
            warnings.append(f"Dangling: spouse {r.spouse_id} of {r.person_id} not found")
            continue

        if spouse.spouse_id != r.person_id:
            warnings.append(
                f"One-sided: {r.person_id} names {spouse.person_id} as spouse, "
                f"but {spouse.person_id} names {spouse.spouse_id or 'nobody'}"
            )

        own_gen = normalize_generation(r.generation)
        spouse_gen = normalize_generation(spouse.generation)
        if own_gen != spouse_gen:
            warnings.append(
                f"Unpaired: {r.person_id} (generation {own_gen}) and spouse "
                f"{spouse.person_id} (generation {spouse_gen}) are shown separately"
            )

    return warnings
