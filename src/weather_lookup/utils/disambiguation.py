import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from src.weather_lookup.schemas.location import Location

AUTO_SELECT_CONFIDENCE = 0.9
MAX_SUGGESTIONS = 5

_NUMERIC_QUERY = re.compile(r"^\d+$")


@dataclass
class LocationSelection:
    """Outcome of disambiguating geocoding candidates.

    Attributes:
        auto_selected (Optional[Location]): Candidate the client may use
            without asking, or None when the user has to choose.
        suggestions (List[Location]): Candidates to present for an explicit
            choice; empty when a location was auto-selected.
    """

    auto_selected: Optional[Location] = None
    suggestions: List[Location] = field(default_factory=list)


def is_numeric_query(query: str) -> bool:
    """Return True for pure digit strings such as postal codes."""
    return bool(_NUMERIC_QUERY.match(query.strip()))


def select_location(
    query: str, locations: Sequence[Location]
) -> LocationSelection:
    """Decide whether the best geocoding candidate can be used directly.

    The top candidate is auto-selected when it is the only one, or when its
    confidence is above `AUTO_SELECT_CONFIDENCE`. Neither rule applies to a
    purely numeric query: a bare postal code matches places in many
    countries, so the user must confirm it. In every other case up to
    `MAX_SUGGESTIONS` candidates are offered.

    Args:
        query (str): Text the user searched for.
        locations (Sequence[Location]): Candidates, best first.

    Returns:
        LocationSelection: Auto-selected location or suggestions.
    """
    if not locations:
        return LocationSelection()

    top = locations[0]
    if not is_numeric_query(query):
        if len(locations) == 1:
            return LocationSelection(auto_selected=top)
        confidence = top.confidence
        if confidence is not None and confidence > AUTO_SELECT_CONFIDENCE:
            return LocationSelection(auto_selected=top)

    return LocationSelection(suggestions=list(locations[:MAX_SUGGESTIONS]))
