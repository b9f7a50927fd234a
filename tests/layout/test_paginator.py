"""
Unit tests for the pagination engine.

Covers automatic overflow breaks, manual breaks, overflow suppression
and the structural guarantees every PageModel must satisfy.
"""

import logging

import pytest

from report_toolkit.layout import (
    LayoutConfig,
    OverflowScope,
    PhotoLayoutMode,
    paginate,
)
from report_toolkit.layout.paginator import has_effective_manual_break


BUDGET = 997


def _ids(model):
    return [list(page.item_ids) for page in model.pages]


class TestPaginateScenarios:
    """Reference scenarios with fixed 300px records."""

    def test_when_three_records_fit_then_single_page(self, record_factory, fixed_height):
        # Arrange
        records = [record_factory(f"r{i}") for i in range(1, 4)]

        # Act
        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        # Assert
        assert model.page_count == 1
        assert _ids(model) == [["r1", "r2", "r3"]]
        assert model.pages[0].estimated_height == 900
        assert not model.pages[0].overflowing

    def test_when_fourth_record_overflows_then_it_starts_page_two(self, record_factory, fixed_height):
        records = [record_factory(f"r{i}") for i in range(1, 5)]

        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert _ids(model) == [["r1", "r2", "r3"], ["r4"]]
        assert model.pages[1].page_number == 2
        assert not model.pages[1].opened_by_manual_break

    def test_when_third_record_breaks_before_then_page_two_starts_there(self, record_factory, fixed_height):
        records = [
            record_factory(f"r{i}", page_break_before=(i == 3))
            for i in range(1, 6)
        ]

        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert _ids(model) == [["r1", "r2"], ["r3", "r4", "r5"]]
        assert model.pages[1].opened_by_manual_break

    def test_when_no_records_then_one_empty_page(self):
        model = paginate([])

        assert model.page_count == 1
        assert model.pages[0].is_empty
        assert model.pages[0].page_number == 1
        assert model.pages[0].estimated_height == 0
        assert model.warnings == ()


class TestManualBreaks:
    """Tests for pageBreakBefore / pageBreakAfter handling."""

    def test_when_break_after_then_next_record_opens_page(self, record_factory, fixed_height):
        records = [
            record_factory("a", page_break_after=True),
            record_factory("b"),
        ]

        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert _ids(model) == [["a"], ["b"]]
        assert model.pages[1].opened_by_manual_break

    def test_when_first_record_breaks_before_then_no_empty_page(self, record_factory, fixed_height):
        records = [record_factory("a", page_break_before=True), record_factory("b")]

        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert _ids(model) == [["a", "b"]]

    def test_when_last_record_breaks_after_then_no_trailing_page(self, record_factory, fixed_height):
        records = [record_factory("a"), record_factory("b", page_break_after=True)]

        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert model.page_count == 1

    def test_when_break_before_and_after_coincide_then_single_break(self, record_factory, fixed_height):
        records = [
            record_factory("a", page_break_after=True),
            record_factory("b", page_break_before=True),
        ]

        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert _ids(model) == [["a"], ["b"]]

    def test_when_no_op_flags_only_then_automatic_breaks_still_apply(self, record_factory, fixed_height):
        records = [record_factory(f"r{i}") for i in range(1, 5)]
        records[0] = records[0].with_breaks(before=True)
        records[-1] = records[-1].with_breaks(after=True)

        model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert not has_effective_manual_break(records)
        assert _ids(model) == [["r1", "r2", "r3"], ["r4"]]


class TestOverflowSuppression:
    """Automatic breaks are suppressed once manual breaks are in play."""

    @pytest.fixture
    def records(self, record_factory):
        return [
            record_factory(f"r{i}", page_break_before=(i == 5))
            for i in range(1, 8)
        ]

    def test_when_document_scope_then_no_automatic_breaks_anywhere(self, records, fixed_height):
        # Arrange
        config = LayoutConfig(overflow_scope=OverflowScope.DOCUMENT)

        # Act
        model = paginate(records, config, available_height=BUDGET, estimator=fixed_height())

        # Assert
        assert _ids(model) == [["r1", "r2", "r3", "r4"], ["r5", "r6", "r7"]]
        assert model.pages[0].overflowing
        assert [p.page_number for p in model.overflowing_pages] == [1]

    def test_when_page_scope_then_only_manual_pages_suppress(self, records, fixed_height):
        config = LayoutConfig(overflow_scope="page")

        model = paginate(records, config, available_height=BUDGET, estimator=fixed_height())

        assert _ids(model) == [["r1", "r2", "r3"], ["r4"], ["r5", "r6", "r7"]]
        assert model.overflowing_pages == ()

    def test_when_page_overflows_then_warning_reported(self, records, fixed_height, caplog):
        with caplog.at_level(logging.WARNING, logger="report_toolkit.layout.paginator"):
            model = paginate(records, available_height=BUDGET, estimator=fixed_height())

        assert len(model.warnings) == 1
        assert "Page 1 overflows" in model.warnings[0]
        assert "Page 1 overflows" in caplog.text


class TestOversizedRecords:
    """Records taller than a page are placed, never split or dropped."""

    def test_when_single_record_exceeds_budget_then_alone_and_flagged(self, record_factory, fixed_height):
        records = [record_factory("small"), record_factory("huge"), record_factory("after")]
        estimator = fixed_height({"huge": 2000})

        model = paginate(records, available_height=BUDGET, estimator=estimator)

        assert _ids(model) == [["small"], ["huge"], ["after"]]
        assert model.pages[1].overflowing
        assert model.pages[1].estimated_height == 2000

    def test_when_first_record_exceeds_budget_then_still_on_page_one(self, record_factory, fixed_height):
        records = [record_factory("huge")]

        model = paginate(records, available_height=BUDGET, estimator=fixed_height({"huge": 5000}))

        assert model.page_count == 1
        assert model.pages[0].overflowing


class TestPaginateStructure:
    """Partition, order and determinism guarantees."""

    @pytest.fixture
    def mixed_records(self, record_factory, photo_factory):
        return [
            record_factory(
                f"r{i}",
                finding="Observed residue on surfaces. " * (i % 5),
                photos=tuple(photo_factory(f"p{i}-{j}") for j in range(i % 3)),
                page_break_before=(i == 6),
            )
            for i in range(1, 12)
        ]

    @pytest.mark.parametrize("mode", [PhotoLayoutMode.STACK, PhotoLayoutMode.GRID])
    def test_when_paginated_then_pages_partition_records_in_order(self, mixed_records, mode):
        model = paginate(mixed_records, mode=mode)

        assert [r.id for r in model.records] == [r.id for r in mixed_records]
        assert all(not page.is_empty for page in model.pages)
        assert [p.page_number for p in model.pages] == list(range(1, model.page_count + 1))

    def test_when_paginated_twice_then_identical(self, mixed_records):
        first = paginate(mixed_records, mode="grid")
        second = paginate(mixed_records, mode="grid")

        assert _ids(first) == _ids(second)
        assert [p.estimated_height for p in first.pages] == [p.estimated_height for p in second.pages]

    def test_when_record_breaks_before_then_it_starts_its_page(self, mixed_records):
        model = paginate(mixed_records)

        page_index, item_index = model.locate("r6")
        assert item_index == 0
        assert page_index > 0

    def test_when_default_estimator_then_fourth_empty_record_moves_on(self, record_factory):
        # 289px each: three fit into 996.5px, four do not
        records = [record_factory(f"r{i}") for i in range(1, 5)]

        model = paginate(records)

        assert model.available_height == pytest.approx(996.51, abs=0.01)
        assert _ids(model) == [["r1", "r2", "r3"], ["r4"]]

    def test_when_mode_given_as_string_then_coerced(self, record_factory):
        model = paginate([record_factory("a")], mode="grid")

        assert model.mode is PhotoLayoutMode.GRID

    def test_when_page_of_unknown_record_then_none(self, record_factory):
        model = paginate([record_factory("a")])

        assert model.locate("missing") is None
        assert model.page_of("missing") is None
        assert model.page_of("a").page_number == 1
