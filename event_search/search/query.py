"""Search query construction."""

from __future__ import annotations

from ..errors import InvalidArgumentError


def build_query(field_of_interest: str, city_name: str) -> str:
    """Return the search engine query for events in a city.

    Both values are quoted verbatim, e.g. ``"AI conferences" events in "Berlin"``.

    Raises:
        InvalidArgumentError: if either argument is empty.  The field of
            interest is checked first.
    """
    if not field_of_interest:
        raise InvalidArgumentError("Field of interest cannot be empty.")
    if not city_name:
        raise InvalidArgumentError("City name cannot be empty.")
    return f'"{field_of_interest}" events in "{city_name}"'
