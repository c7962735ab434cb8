"""Layout configuration."""

from dataclasses import dataclass, fields
import json
from pathlib import Path

SPACING_FIELDS = (
    "sibling_spacing",
    "generation_spacing",
    "partner_gap",
    "house_padding",
    "min_spacing",
)


@dataclass(frozen=True)
class LayoutConfig:
    sibling_spacing: float = 100  # Horizontal space between siblings
    generation_spacing: float = 120  # Vertical space between generations
    partner_gap: float = 60  # Space between marriage partners
    base_offset: float = 100  # Canvas margin for the first column and row
    house_padding: float = 150  # Gap between house groups within a generation
    min_spacing: float = 60  # Closest two characters of one generation may sit
    display_name_max_length: int = 16
    strict: bool = False  # Reject datasets with unreachable characters

    def __post_init__(self):
        for name in SPACING_FIELDS:
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.display_name_max_length < 1:
            raise ValueError("display_name_max_length must be at least 1")

    @classmethod
    def from_mapping(cls, data: dict) -> "LayoutConfig":
        """Build a config from a plain mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown layout config keys: {unknown}")
        return cls(**data)


def load_config(path: Path) -> LayoutConfig:
    """Read a JSON object of layout overrides from `path`."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Layout config in {path} must be a JSON object")
    return LayoutConfig.from_mapping(data)
