"""Decoding of the family-member search payload and date handling utilities."""

import json
import re
from typing import Any, Iterable

from models import PersonRecord

# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

# Payload keys mapped onto PersonRecord fields; anything else lands in `extra`
KNOWN_KEYS = {
    "personId",
    "generation",
    "firstName",
    "gender",
    "motherId",
    "fatherId",
    "spouseId",
    "dob",
    "dod",
    "familyLineId",
    "familyId",
}


def parse_date_string(date_str: str | None) -> str | None:
    """
    Parse a date string from the API into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "1954-11-25"
    - "1954-11-25T00:00:00Z"
    - "1954-11-25 08:30:00"
    - "1746-00-00"
    - "1954"
    - "about 1950"
    - "(circa 1855?)"
    - "25 NOV 1954"
    - "02 May1838"
    - "NOV 1954"
    - "May, 1837"
    - "11/25/1954"
    - "04 05 1911"
    - "April 17, 1850"
    - "SEPT. 17,1910"
    """
    if not date_str:
        return None

    # Clean up the string
    s = str(date_str).strip()
    # Remove parentheses
    s = s.strip("()")
    # Remove trailing question marks
    s = s.rstrip("?")
    # Remove qualifiers (ABT, ABOUT, BEF, AFT, EST, CAL, AROUND, etc.) - with optional colon
    s = re.sub(
        r"^(ABT\.?|ABOUT|BEF\.?|BEFORE|AFT\.?|AFTER|EST\.?|CAL\.?|FROM|TO|BET\.?|AND|CIRCA|CA\.?|AROUND):?\s*",
        "",
        s,
        flags=re.IGNORECASE,
    )
    s = s.strip()

    if not s:
        return None

    year: int | None = None
    month: int | None = None
    day: int | None = None

    # Pattern 0: ISO date, optionally followed by a time part
    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})(?:[T ].*)?$", s)
    if match:
        year = int(match.group(1))
        month = int(match.group(2))
        day = int(match.group(3))
        # Handle 00 month/day as defaults
        if month == 0:
            month = 1
        if day == 0:
            day = 1
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"
        return None

    # Pattern 1: "25 NOV 1954", "11 Aug. 1968" or "02 May1838" (day month year)
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        day = int(match.group(1))
        month = MONTH_MAP.get(match.group(2).upper())
        year = int(match.group(3))
        if month and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    # Pattern 2: "NOV 1954", "November 1954" or "May, 1837" (month year)
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        year = int(match.group(2))
        if month:
            return f"{year:04d}-{month:02d}-01"

    # Pattern 3: "1954" (year only)
    match = re.match(r"^(\d{4})$", s)
    if match:
        year = int(match.group(1))
        return f"{year:04d}-01-01"

    # Pattern 4: "11/25/1954" or "11-25-1954" (MM/DD/YYYY)
    match = re.match(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$", s)
    if match:
        month = int(match.group(1))
        day = int(match.group(2))
        year = int(match.group(3))
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    # Pattern 5: "04 05 1911" (MM DD YYYY with spaces)
    match = re.match(r"^(\d{1,2})\s+(\d{1,2})\s+(\d{4})$", s)
    if match:
        month = int(match.group(1))
        day = int(match.group(2))
        year = int(match.group(3))
        if 1 <= month <= 12 and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    # Pattern 6: "April 17, 1850", "SEPT. 17,1910" or "Oct.12,1929" (month day, year)
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        day = int(match.group(2))
        year = int(match.group(3))
        if month and 1 <= day <= 31:
            return f"{year:04d}-{month:02d}-{day:02d}"

    return None


def _optional_id(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


def parse_person(obj: dict[str, Any]) -> PersonRecord:
    """Map one search result object onto a PersonRecord."""
    person_id = _optional_id(obj.get("personId"))
    if person_id is None:
        raise ValueError(f"Family member without personId: {obj!r}")

    birth_date_string = _optional_text(obj.get("dob"))
    death_date_string = _optional_text(obj.get("dod"))

    return PersonRecord(
        person_id=person_id,
        generation=obj.get("generation"),
        first_name=_optional_text(obj.get("firstName")),
        gender=_optional_text(obj.get("gender")),
        mother_id=_optional_id(obj.get("motherId")),
        father_id=_optional_id(obj.get("fatherId")),
        spouse_id=_optional_id(obj.get("spouseId")),
        birth_date_string=birth_date_string,
        birth_date=parse_date_string(birth_date_string),
        death_date_string=death_date_string,
        death_date=parse_date_string(death_date_string),
        family_line_id=_optional_id(obj.get("familyLineId")),
        family_id=_optional_id(obj.get("familyId")),
        extra={k: v for k, v in obj.items() if k not in KNOWN_KEYS},
    )


def parse_payload(text: str | bytes) -> list[PersonRecord]:
    """
    Decode a JSON list of family members into PersonRecords.

    Entries that are not objects or carry no personId are skipped. Raises
    ValueError (json.JSONDecodeError included) when the payload itself is not
    a JSON list.
    """
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of family members, got {type(data).__name__}")

    records: list[PersonRecord] = []
    for obj in data:
        if not isinstance(obj, dict) or _optional_id(obj.get("personId")) is None:
            continue
        records.append(parse_person(obj))

    return records


def filter_family_line(
    records: Iterable[PersonRecord], family_line_id: str | None
) -> list[PersonRecord]:
    """Keep the members of one family line; an empty id keeps everyone."""
    if not family_line_id:
        return list(records)
    return [
        r
        for r in records
        if r.family_line_id == family_line_id or r.family_id == family_line_id
    ]
