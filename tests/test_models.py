import random

import pytest

from family_library.models import (
    LibraryAccumulator,
    LibraryItem,
    LibraryRecord,
    name_sort_key,
)


def _record(label, declared, name, **kwargs):
    return LibraryRecord(group_label=label, declared_count=declared, item=LibraryItem(name=name, **kwargs))


@pytest.fixture
def accumulator():
    return LibraryAccumulator()


def test_merge_creates_group(accumulator):
    added = accumulator.merge([_record("Shared Library", 3, "Portal")])
    assert added == 1
    assert accumulator.groups["Shared Library"].declared_count == 3
    assert list(accumulator.groups["Shared Library"].items) == ["Portal"]


def test_merge_first_write_wins(accumulator):
    accumulator.merge([_record("Shared Library", 1, "Portal", unavailable=True)])
    added = accumulator.merge([_record("Shared Library", 1, "Portal", family_owners=4)])

    item = accumulator.groups["Shared Library"].items["Portal"]
    assert added == 0
    assert item.unavailable is True
    assert item.family_owners is None


def test_declared_count_only_rises(accumulator):
    accumulator.merge([_record("Shared Library", 10, "A")])
    accumulator.merge([_record("Shared Library", 25, "B")])
    accumulator.merge([_record("Shared Library", 5, "C")])
    assert accumulator.groups["Shared Library"].declared_count == 25


def test_header_only_record_creates_group(accumulator):
    added = accumulator.merge([LibraryRecord(group_label="Wishlist", declared_count=7)])
    assert added == 0
    assert accumulator.groups["Wishlist"].declared_count == 7
    assert accumulator.total_items() == 0
    assert accumulator.is_empty()


def test_same_name_in_different_groups(accumulator):
    accumulator.merge([_record("Mine", 1, "Portal"), _record("Shared", 1, "Portal")])
    assert accumulator.total_items() == 2


def test_random_merges_are_monotonic_and_unique(accumulator):
    rng = random.Random(1234)
    labels = ["Mine", "Shared", "Unknown"]
    names = [f"Game {i}" for i in range(40)]
    previous = {}

    for _ in range(200):
        batch = [
            _record(rng.choice(labels), rng.randint(0, 60), rng.choice(names))
            for _ in range(rng.randint(0, 6))
        ]
        accumulator.merge(batch)

        for label, group in accumulator.groups.items():
            count, declared = previous.get(label, (0, 0))
            assert len(group.items) >= count
            assert group.declared_count >= declared
            assert all(key == item.name for key, item in group.items.items())
            previous[label] = (len(group.items), group.declared_count)


def test_report_items_sorted(accumulator):
    accumulator.merge([
        _record("Shared", 0, "zork"),
        _record("Shared", 0, "Baldur's Gate 3"),
        _record("Shared", 0, "alan wake"),
        _record("Shared", 0, "Celeste"),
    ])
    report = accumulator.to_report(account="Gabe")

    names = [item.name for item in report.groups[0].items]
    assert names == ["alan wake", "Baldur's Gate 3", "Celeste", "zork"]
    assert names == sorted(names, key=name_sort_key)


def test_report_totals_and_partial_groups(accumulator):
    accumulator.merge([_record("Mine", 2, "A"), _record("Mine", 2, "B"), _record("Shared", 20, "C")])
    report = accumulator.to_report(account="Gabe")

    assert report.total == 3
    assert [group.label for group in report.partial_groups()] == ["Shared"]
    assert report.groups[0].is_partial is False


def test_report_items_sorted_with_accents(accumulator):
    accumulator.merge([
        _record("Shared", 0, "Zelda"),
        _record("Shared", 0, "Ōkami"),
        _record("Shared", 0, "Éclair"),
        _record("Shared", 0, "Alan Wake"),
    ])
    report = accumulator.to_report(account="Gabe")

    names = [item.name for item in report.groups[0].items]
    assert names == ["Alan Wake", "Éclair", "Ōkami", "Zelda"]


def test_sort_key_folds_case_and_accents():
    assert name_sort_key("éclair")[0] == name_sort_key("Eclair")[0]
    assert sorted(["eclair", "Éclair"], key=name_sort_key) == sorted(["Éclair", "eclair"], key=name_sort_key)
