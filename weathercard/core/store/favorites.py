"""Ordered, duplicate-free list of the user's favorite cities."""

import logging
from typing import Iterable, List, Optional, Tuple
from weathercard.models.state import clean_city

logger = logging.getLogger(__name__)


class PopularCityListManager:
    """Most recently added city first; removal always takes the oldest one."""

    def __init__(self, initial: Iterable[str] = ()):
        self._cities: List[str] = []
        # Seeds keep their given order, so append rather than prepend.
        for name in initial:
            city = clean_city(name)
            if city and city not in self._cities:
                self._cities.append(city)

    def add(self, name: Optional[str]) -> bool:
        """Prepends the trimmed name. Returns False for blanks and duplicates."""
        city = clean_city(name)
        if city is None:
            logger.debug("Ignoring blank favorite")
            return False
        if city in self._cities:
            logger.debug(f"'{city}' is already a favorite")
            return False
        self._cities.insert(0, city)
        logger.info(f"Added favorite '{city}'")
        return True

    def remove_last(self) -> Optional[str]:
        """Drops and returns the oldest favorite, or None if the list is empty."""
        if not self._cities:
            return None
        city = self._cities.pop()
        logger.info(f"Removed favorite '{city}'")
        return city

    @property
    def cities(self) -> Tuple[str, ...]:
        return tuple(self._cities)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._cities

    def __len__(self) -> int:
        return len(self._cities)
