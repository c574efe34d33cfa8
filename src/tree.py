"""Generational layout of a family: grouping, spouse pairing and ordering.

`build_tree` is a pure function of its input. Every lookup table and
`seen` set is created inside the call, so concurrent calls on different
snapshots need no coordination.
"""

from datetime import date
from typing import Any, Iterable

from models import (
    FEMALE,
    MALE,
    DisplayMember,
    GenderClass,
    GenerationBlock,
    PersonRecord,
    SpouseSummary,
    TreeResult,
)

DEFAULT_GENERATION = 1
UNKNOWN_NAME = "Unknown"
MALE_TOKENS = ("M", "Male")


def normalize_generation(value: Any) -> int:
    """
    Coerce a raw generation value to a positive integer.

    Absent, zero, negative, boolean, non-numeric and non-integral values all
    fall back to generation 1.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_GENERATION

    if isinstance(value, str):
        try:
            value = int(value)
        except ValueError:
            return DEFAULT_GENERATION

    if isinstance(value, float):
        if not value.is_integer():
            return DEFAULT_GENERATION
        value = int(value)

    if not isinstance(value, int) or value < 1:
        return DEFAULT_GENERATION
    return value


def gender_class(gender: str | None) -> GenderClass:
    """Only an exact male token is male-coded; anything else is female-coded."""
    return MALE if gender in MALE_TOKENS else FEMALE


def compute_age(
    birth_date: str | None, death_date: str | None = None, today: date | None = None
) -> int | None:
    """
    Age in whole calendar years: end year minus birth year.

    Month and day are ignored on purpose, so someone born in December counts
    a year older on the first of January.
    """
    birth_year = _year(birth_date)
    if birth_year is None:
        return None

    end_year = _year(death_date)
    if end_year is None:
        end_year = (today or date.today()).year
    return end_year - birth_year


def _year(iso_date: str | None) -> int | None:
    # Parse years from ISO format
    if not iso_date:
        return None
    try:
        return int(iso_date[:4])
    except ValueError:
        return None


def group_by_generation(records: Iterable[PersonRecord]) -> dict[int, list[PersonRecord]]:
    """Partition records by generation, keeping their relative order."""
    groups: dict[int, list[PersonRecord]] = {}
    for record in records:
        groups.setdefault(normalize_generation(record.generation), []).append(record)
    return groups


def _display_member(
    record: PersonRecord, spouse: PersonRecord | None, today: date | None
) -> DisplayMember:
    spouse_summary = None
    if spouse is not None:
        spouse_summary = SpouseSummary(display_name=spouse.first_name or UNKNOWN_NAME)

    # A recorded but unreadable death date gives no age rather than a living one
    if record.death_date_string and not record.death_date:
        age = None
    else:
        age = compute_age(record.birth_date, record.death_date, today)

    return DisplayMember(
        id=record.person_id,
        display_name=record.first_name or UNKNOWN_NAME,
        gender_class=gender_class(record.gender),
        age=age,
        source=record,
        spouse=spouse_summary,
    )


def resolve_generation(
    records: list[PersonRecord],
    lookup: dict[str, PersonRecord],
    today: date | None = None,
) -> list[DisplayMember]:
    """
    Merge spouses within one generation into single display units.

    Records are scanned in order. A female-coded record whose spouse is
    male-coded (and still unclaimed in this generation) is deferred: the
    male-coded partner anchors the pair and carries her as its spouse summary.
    Any other record becomes the anchor itself and claims its spouse.

    Spouses are only paired when they resolve, are not the record itself,
    share the generation and have not been claimed yet. Everything else
    renders unpaired.

    Args:
        records: The generation's records in input order
        lookup: person_id -> record across the whole input
        today: Reference date for the age of living people

    Returns:
        Display members in first-encounter order
    """
    level = normalize_generation(records[0].generation) if records else DEFAULT_GENERATION
    seen: set[str] = set()
    # Either a built member or a deferred record holding its slot
    slots: list[DisplayMember | PersonRecord] = []

    for record in records:
        if record.person_id in seen:
            continue

        spouse = lookup.get(record.spouse_id) if record.spouse_id else None
        if spouse is not None and (
            spouse.person_id == record.person_id
            or spouse.person_id in seen
            or normalize_generation(spouse.generation) != level
        ):
            spouse = None

        if (
            spouse is not None
            and gender_class(record.gender) == FEMALE
            and gender_class(spouse.gender) == MALE
        ):
            slots.append(record)
            continue

        if spouse is not None:
            seen.add(spouse.person_id)

        slots.append(_display_member(record, spouse, today))
        seen.add(record.person_id)

    members: list[DisplayMember] = []
    for slot in slots:
        if isinstance(slot, DisplayMember):
            members.append(slot)
        elif slot.person_id not in seen:
            # Deferred, but the partner was claimed by someone else first
            members.append(_display_member(slot, None, today))
            seen.add(slot.person_id)

    return members


def build_tree(records: Iterable[PersonRecord], today: date | None = None) -> TreeResult:
    """
    Build the generation-ordered family tree for a record collection.

    Never raises for malformed data: bad generations fall back to 1, missing
    names become "Unknown", dangling or self-referencing spouse ids are
    treated as no spouse. An empty collection gives an empty result.
    """
    records = list(records)

    lookup: dict[str, PersonRecord] = {}
    for record in records:
        lookup.setdefault(record.person_id, record)

    groups = group_by_generation(records)
    generations = tuple(
        GenerationBlock(level=level, members=tuple(resolve_generation(groups[level], lookup, today)))
        for level in sorted(groups)
    )

    return TreeResult(generations=generations, total_member_count=len(records))
