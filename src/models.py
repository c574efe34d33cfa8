"""Data classes for family records and the generational tree built from them."""

from dataclasses import dataclass, field
from typing import Any, Literal

MALE = "male"
FEMALE = "female"

GenderClass = Literal["male", "female"]
MarriageStatus = Literal["married", "divorced"]


@dataclass(frozen=True)
class PersonRecord:
    person_id: str
    generation: Any  # raw value as supplied; see tree.normalize_generation
    first_name: str | None = None
    gender: str | None = None
    mother_id: str | None = None
    father_id: str | None = None
    spouse_id: str | None = None
    birth_date_string: str | None = None
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    death_date_string: str | None = None
    death_date: str | None = None  # ISO format YYYY-MM-DD or None
    family_line_id: str | None = None
    family_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class SpouseSummary:
    display_name: str
    status: MarriageStatus = "married"


@dataclass(frozen=True)
class DisplayMember:
    id: str
    display_name: str
    gender_class: GenderClass
    age: int | None
    source: PersonRecord
    spouse: SpouseSummary | None = None
    # Nothing upstream records divorces yet, so this stays empty.
    ex_spouses: tuple[SpouseSummary, ...] = ()

    @property
    def is_alive(self) -> bool:
        return not self.source.death_date_string


@dataclass(frozen=True)
class GenerationBlock:
    level: int
    members: tuple[DisplayMember, ...]


@dataclass(frozen=True)
class TreeResult:
    generations: tuple[GenerationBlock, ...]
    total_member_count: int  # size of the raw input, paired spouses included

    @property
    def generation_count(self) -> int:
        return len(self.generations)
