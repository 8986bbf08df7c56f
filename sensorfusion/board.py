#!/usr/bin/env python3
"""
Contact Board

Identity-keyed store of everything the sensor currently believes exists.
New observations are fused against existing entries of the same class:
- A search observation overlapping a tracked contact is dropped
- Otherwise it replaces the lowest-id overlapping entry and evicts the rest
- A tracked observation replaces entries whose region contains it

Ids are small non-negative integers; a fresh id is one past the largest live
id (0 on an empty board). Iteration is always in ascending id order.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterator, List, Optional, Tuple

from .contacts import DEFAULT_HISTORY_CAPACITY, Contact, SearchContact, TrackedContact
from .draw import Canvas, Colour
from .geometry import Ellipse

logger = logging.getLogger(__name__)


# =============================================================================
# ERRORS
# =============================================================================

class ContactNotFound(LookupError):
    """Raised when an operation names an id that is not on the board."""

    def __init__(self, contact_id: int):
        super().__init__(f"No contact with id {contact_id}")
        self.contact_id = contact_id


# =============================================================================
# CONTACT BOARD
# =============================================================================

class ContactBoard:
    """
    Ordered map of contact id -> Contact with overlap-based deduplication.

    Regions are aged to the caller-supplied time on every insertion, so two
    contacts only count as duplicates if they overlap at that instant.
    """

    def __init__(self):
        self._contacts: Dict[int, Contact] = {}

    # -------------------------------------------------------------------------
    # Fusion
    # -------------------------------------------------------------------------

    def add(self, contact: Contact, now: float) -> int:
        """
        Fuse an observation into the board.

        Args:
            contact: New search or tracked observation
            now: Current simulation time, used to age every region

        Returns:
            Id under which the observation now lives, or for a dropped search
            observation, the id of the tracked contact covering it
        """
        if isinstance(contact, TrackedContact):
            return self._add_tracked(contact, now)
        return self._add_search(contact, now)

    def _add_search(self, contact: SearchContact, now: float) -> int:
        contact_area = contact.get_area_now(now)
        matches = [
            (contact_id, existing)
            for contact_id, existing in self.items()
            if existing.contact_class == contact.contact_class
            and (existing.get_area_now(now).contains(contact.position)
                 or contact_area.contains(existing.position))
        ]

        for contact_id, existing in matches:
            if isinstance(existing, TrackedContact):
                logger.debug("Search observation covered by tracked contact %d", contact_id)
                return contact_id

        return self._replace_matches([contact_id for contact_id, _ in matches], contact)

    def _add_tracked(self, contact: TrackedContact, now: float) -> int:
        matches = [
            contact_id
            for contact_id, existing in self.items()
            if existing.contact_class == contact.contact_class
            and existing.get_area_now(now).contains(contact.position)
        ]
        return self._replace_matches(matches, contact)

    def _replace_matches(self, matches: List[int], contact: Contact) -> int:
        """Insert contact under the first matching id, evicting the others."""
        for contact_id in matches[1:]:
            logger.debug("Merging duplicate contact %d into %d", contact_id, matches[0])
            del self._contacts[contact_id]

        if matches:
            contact_id = matches[0]
        else:
            contact_id = max(self._contacts) + 1 if self._contacts else 0

        self._contacts[contact_id] = contact
        return contact_id

    # -------------------------------------------------------------------------
    # Direct access
    # -------------------------------------------------------------------------

    def update(self, contact_id: int, contact: Contact) -> None:
        """Store contact under a known id without fusion."""
        self._contacts[contact_id] = contact

    def get(self, contact_id: int) -> Optional[Contact]:
        return self._contacts.get(contact_id)

    def take(self, contact_id: int) -> Optional[Contact]:
        """Remove and return a contact, or None if absent."""
        return self._contacts.pop(contact_id, None)

    def remove(self, contact_id: int) -> bool:
        """Delete a contact; True if it existed."""
        return self.take(contact_id) is not None

    def track(self, contact_id: int,
              capacity: int = DEFAULT_HISTORY_CAPACITY) -> TrackedContact:
        """
        Promote a contact to tracked in place.

        Raises:
            ContactNotFound: If contact_id is not on the board
        """
        contact = self._contacts.get(contact_id)
        if contact is None:
            raise ContactNotFound(contact_id)
        if isinstance(contact, SearchContact):
            contact = TrackedContact.from_search(contact, capacity)
            self._contacts[contact_id] = contact
        return contact

    def untrack(self, contact_id: int) -> Optional[SearchContact]:
        """Demote a tracked contact to a search contact in place."""
        contact = self._contacts.get(contact_id)
        if contact is None:
            return None
        if isinstance(contact, TrackedContact):
            contact = contact.to_search()
            self._contacts[contact_id] = contact
        return contact

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def ids(self) -> List[int]:
        return sorted(self._contacts)

    def items(self) -> List[Tuple[int, Contact]]:
        """(id, contact) pairs in ascending id order."""
        return [(contact_id, self._contacts[contact_id]) for contact_id in self.ids()]

    def count(self) -> int:
        return len(self._contacts)

    def tracked(self) -> List[Tuple[int, TrackedContact]]:
        return [(i, c) for i, c in self.items() if isinstance(c, TrackedContact)]

    def areas(self, now: float) -> List[Tuple[int, Ellipse]]:
        """Current uncertainty region of every contact."""
        return [(i, c.get_area_now(now)) for i, c in self.items()]

    def __len__(self) -> int:
        return len(self._contacts)

    def __contains__(self, contact_id: object) -> bool:
        return contact_id in self._contacts

    def __iter__(self) -> Iterator[Tuple[int, Contact]]:
        return iter(self.items())

    # -------------------------------------------------------------------------
    # Diagnostics
    # -------------------------------------------------------------------------

    def draw(self, canvas: Canvas, now: float) -> None:
        """Outline every region: search contacts red, tracked green."""
        for _, contact in self.items():
            colour = Colour.GREEN if isinstance(contact, TrackedContact) else Colour.RED
            canvas.polyline(contact.get_area_now(now).boundary(), colour)
