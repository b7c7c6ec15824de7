# family_library/models.py

from __future__ import annotations

import locale
import unicodedata
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional


def _fold(name: str) -> str:
    decomposed = unicodedata.normalize("NFKD", name.casefold())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def name_sort_key(name: str):
    """
    Locale-aware sort key for item names.

    Accents and case are folded first so the order holds even when the
    process collation is still the "C" locale; ties fall back to the
    active locale's collation and then the raw name.
    """
    return (_fold(name), locale.strxfrm(name.casefold()), name)


@dataclass
class LibraryItem:
    name: str
    unavailable: bool = False
    family_owners: Optional[int] = None
    store_url: Optional[str] = None


@dataclass
class LibraryRecord:
    """
    One (group, item) row extracted from a single parse pass.

    item is None for a group whose header rendered but which has no named
    tiles yet.
    """

    group_label: str
    declared_count: int
    item: Optional[LibraryItem] = None


@dataclass
class LibraryGroup:
    label: str
    declared_count: int = 0
    items: Dict[str, LibraryItem] = field(default_factory=dict)

    def raise_declared_count(self, declared_count: int) -> None:
        if declared_count > self.declared_count:
            self.declared_count = declared_count

    def add_item(self, item: LibraryItem) -> bool:
        """Insert item unless its name was already recorded (first write wins)."""
        if item.name in self.items:
            return False
        self.items[item.name] = item
        return True

    def sorted_items(self) -> List[LibraryItem]:
        return sorted(self.items.values(), key=lambda item: name_sort_key(item.name))


class LibraryAccumulator:
    """Groups and items gathered across repeated parse passes."""

    def __init__(self):
        self.groups: Dict[str, LibraryGroup] = {}

    def merge(self, records: Iterable[LibraryRecord]) -> int:
        """
        Upsert parsed records.

        Creates missing groups, raises declared counts, and inserts items
        whose names are not yet present in their group.

        Returns:
            Number of newly inserted items
        """
        added = 0
        for record in records:
            group = self.groups.get(record.group_label)
            if group is None:
                group = LibraryGroup(label=record.group_label, declared_count=record.declared_count)
                self.groups[record.group_label] = group
            else:
                group.raise_declared_count(record.declared_count)

            if record.item is not None and group.add_item(record.item):
                added += 1
        return added

    def total_items(self) -> int:
        return sum(len(group.items) for group in self.groups.values())

    def is_empty(self) -> bool:
        return self.total_items() == 0

    def to_report(self, account: str, extracted_at: Optional[datetime] = None) -> LibraryReport:
        groups = [
            GroupReport(
                label=group.label,
                declared_count=group.declared_count,
                items=group.sorted_items(),
            )
            for group in self.groups.values()
        ]
        return LibraryReport(
            account=account,
            extracted_at=extracted_at or datetime.now(),
            groups=groups,
        )


@dataclass
class GroupReport:
    label: str
    declared_count: int
    items: List[LibraryItem] = field(default_factory=list)

    @property
    def found_count(self) -> int:
        return len(self.items)

    @property
    def is_partial(self) -> bool:
        return self.found_count < self.declared_count


@dataclass
class LibraryReport:
    account: str
    extracted_at: datetime
    groups: List[GroupReport] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(group.found_count for group in self.groups)

    def partial_groups(self) -> List[GroupReport]:
        return [group for group in self.groups if group.is_partial]
