"""Difficulty - Ordered piste difficulty levels and filter parsing.

Three levels, ordered easy < intermediate < expert. Source data uses
several vocabularies (OSM piste:difficulty tags, European piste colors);
all of them are normalized here.

A difficulty filter is the set of levels a rider accepts. The textual form
"easy,expert" is what URLs and the CLI carry; an absent or unparseable
filter means every level is allowed.
"""

from enum import Enum
from typing import Iterable, Optional, Union

from skiresort_navigator.constants import DifficultyConfig


class Difficulty(Enum):
    """Piste difficulty, ordered from easiest to hardest."""

    EASY = "easy"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        """0 for easy, 1 for intermediate, 2 for expert."""
        return DifficultyConfig.RANKS[self.value]

    @property
    def weight_multiplier(self) -> float:
        """Cost multiplier applied to piste distance."""
        return DifficultyConfig.WEIGHT_MULTIPLIERS[self.value]

    def __lt__(self, other: "Difficulty") -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.rank < other.rank

    @classmethod
    def parse(cls, value: Union["Difficulty", str, None]) -> "Difficulty":
        """Normalize any known spelling to a Difficulty.

        Accepts members, canonical names, OSM tags (novice, advanced, freeride, ...)
        and piste colors (blue, red, black). Unknown or missing values fall back
        to easy, matching how unlabelled OSM pistes are shown on trail maps.

        Args:
            value: Raw difficulty value

        Returns:
            Parsed Difficulty.
        """
        if isinstance(value, Difficulty):
            return value
        if value is None:
            return cls(DifficultyConfig.FALLBACK)
        canonical = DifficultyConfig.ALIASES.get(str(value).strip().lower(), DifficultyConfig.FALLBACK)
        return cls(canonical)

    @classmethod
    def all(cls) -> frozenset["Difficulty"]:
        """Every difficulty level."""
        return frozenset(cls)


def _lookup(token: str) -> Optional[Difficulty]:
    """Strict alias lookup: None for unknown tokens (unlike Difficulty.parse)."""
    canonical = DifficultyConfig.ALIASES.get(token.strip().lower())
    return Difficulty(canonical) if canonical else None


def parse_difficulty_filter(text: Optional[str]) -> frozenset[Difficulty]:
    """Parse a comma-separated difficulty filter.

    Args:
        text: e.g. "easy,expert" or "blue,red". None or empty means no filter.

    Returns:
        Set of enabled difficulties. All difficulties if nothing usable was given.
    """
    if not text:
        return Difficulty.all()
    parsed = {d for token in text.split(DifficultyConfig.FILTER_SEPARATOR) if (d := _lookup(token))}
    return frozenset(parsed) if parsed else Difficulty.all()


def format_difficulty_filter(difficulties: Iterable[Difficulty]) -> Optional[str]:
    """Format a difficulty set as filter text, ordered easiest first.

    Returns:
        "easy,expert"-style text, or None when every level is enabled.
    """
    enabled = set(difficulties)
    if enabled == set(Difficulty):
        return None
    return DifficultyConfig.FILTER_SEPARATOR.join(d.value for d in sorted(enabled))
