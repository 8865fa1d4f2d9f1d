# tests/test_bill_draft.py
from decimal import Decimal

import pytest

from weighbill.schemas.billing import Unit
from weighbill.services.bill_draft import BillDraft


def test_new_draft_has_one_blank_line():
    draft = BillDraft()
    assert len(draft.lines) == 1
    assert draft.lines[0].amount == Decimal("0")
    assert draft.lines[0].unit == Unit.KGS


def test_last_line_cannot_be_removed():
    draft = BillDraft()
    assert draft.remove_item(0) is False
    assert len(draft.lines) == 1

    draft.add_item()
    assert draft.remove_item(1) is True
    assert len(draft.lines) == 1


def test_update_item_recomputes_line():
    draft = BillDraft()
    line = draft.update_item(0, product_name="Rice", gross_weight_kg=2,
                             gross_weight_gm=345, rate=100)
    assert line.net_weight == Decimal("2.345")
    assert line.amount == Decimal("234.50")
    assert draft.lines[0].amount == Decimal("234.50")


def test_blank_weight_field_counts_as_zero():
    draft = BillDraft()
    line = draft.update_item(0, product_name="Rice", gross_weight_kg="",
                             less_weight_gm="abc", rate=10)
    assert line.net_weight == Decimal("0")
    assert line.amount == Decimal("0.00")


def test_preview_uses_header_charges():
    draft = BillDraft()
    draft.set_header(party_name="Ravi", hamali=20, rounded_off="-0.5")
    draft.update_item(0, product_name="Rice", gross_weight_kg=5, rate=100)

    preview = draft.preview()
    assert preview.totals.grand_total == Decimal("519.50")
    assert draft.to_draft().party_name == "Ravi"


def test_header_update_cannot_replace_lines():
    draft = BillDraft()
    draft.update_item(0, product_name="Rice", gross_weight_kg=1, rate=10)
    with pytest.raises(ValueError):
        draft.set_header(items=[])
    assert draft.preview().totals.subtotal == Decimal("10.00")
    assert len(draft.to_draft().items) == 1
