"""Character record parsing and reference normalization."""

from dataclasses import replace
import json
import logging
from pathlib import Path
import re

from bloodline_chart.models import Character

logger = logging.getLogger(__name__)

REFERENCE_FIELDS = ("parent_1", "parent_2", "betrothed")

DESCRIPTIVE_FIELDS = ("title", "description", "portrait")


def parse_year(value) -> int | None:
    """
    Parse a birth or death year into an int.
    Returns None for empty values.

    Handles values like:
    - 1205
    - "1205"
    - "c. 1205"
    - "about 1205"
    - "1205?"
    - "312 AE"
    - "-40"
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not a year: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"Not a whole year: {value!r}")
        return int(value)

    s = str(value).strip()
    if not s:
        return None

    # Remove trailing question marks and qualifiers (circa, ca., c., about, abt.)
    s = s.rstrip("?").strip()
    s = re.sub(r"^(CIRCA|CA\.?|C\.?|ABOUT|ABT\.?|AROUND)\s*", "", s, flags=re.IGNORECASE)

    # Optional era suffix, e.g. "312 AE"
    match = re.match(r"^(-?\d+)(\s*[A-Za-z.]+)?$", s)
    if match:
        return int(match.group(1))

    raise ValueError(f"Not a year: {value!r}")


def _optional_str(value) -> str | None:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def _parse_aliases(value) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        # The admin form stores aliases as a comma separated string
        return tuple(a.strip() for a in value.split(",") if a.strip())
    return tuple(str(a).strip() for a in value if str(a).strip())


def parse_character(record: dict) -> Character:
    """Build a Character from one raw record (a JSON object)."""
    if not isinstance(record, dict):
        raise ValueError(f"Character record must be an object, got {type(record).__name__}")

    char_id = _optional_str(record.get("id"))
    if char_id is None:
        raise ValueError("Character record has no id")
    name = _optional_str(record.get("name"))
    if name is None:
        raise ValueError(f"Character {char_id!r} has no name")

    return Character(
        id=char_id,
        name=name,
        parent_1=_optional_str(record.get("parent_1")),
        parent_2=_optional_str(record.get("parent_2")),
        betrothed=_optional_str(record.get("betrothed")),
        main_house=_optional_str(record.get("main_house")),
        secondary_house=_optional_str(record.get("secondary_house")),
        birth_year=parse_year(record.get("birth_year")),
        death_year=parse_year(record.get("death_year")),
        aliases=_parse_aliases(record.get("aliases")),
        **{key: _optional_str(record.get(key)) for key in DESCRIPTIVE_FIELDS},
    )


def parse_characters(records: list[dict]) -> list[Character]:
    """Parse raw records in order. Errors name the offending record index."""
    characters: list[Character] = []
    for index, record in enumerate(records):
        try:
            characters.append(parse_character(record))
        except ValueError as e:
            raise ValueError(f"Record {index}: {e}") from e
    return characters


def normalize_references(characters: list[Character]) -> list[Character]:
    """
    Rewrite parent/betrothed references given as a full name to the matching id.

    Hand-entered data sometimes names a parent instead of using its id. A
    reference is rewritten only when it is not a known id and exactly one
    character carries that name; anything else is left for relationship
    inference to drop.
    """
    ids = {c.id for c in characters}
    ids_by_name: dict[str, list[str]] = {}
    for c in characters:
        ids_by_name.setdefault(c.name, []).append(c.id)

    normalized: list[Character] = []
    for c in characters:
        changes = {}
        for key in REFERENCE_FIELDS:
            ref = getattr(c, key)
            if ref is None or ref in ids:
                continue
            matches = ids_by_name.get(ref, [])
            if len(matches) == 1:
                logger.debug("Resolved %s=%r of %s to id %s", key, ref, c.id, matches[0])
                changes[key] = matches[0]
        normalized.append(replace(c, **changes) if changes else c)
    return normalized


def load_characters(filepath: Path) -> list[Character]:
    """
    Load characters from a JSON file.

    The file holds either a list of character objects or an object with a
    "characters" list, as served by the site's character API.
    """
    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("characters")
    if not isinstance(data, list):
        raise ValueError(f"{filepath}: expected a list of characters")

    characters = normalize_references(parse_characters(data))
    logger.info("Loaded %d characters from %s", len(characters), filepath)
    return characters
