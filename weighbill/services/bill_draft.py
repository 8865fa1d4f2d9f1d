# weighbill/services/bill_draft.py
from __future__ import annotations

from typing import Any, List

from weighbill.schemas.billing import BillDraftIn, BillLineIn, BillLineOut, BillPreviewOut
from weighbill.services.billing_calc import compute_line, preview_bill


class BillDraft:
    """
    In-progress bill on the entry form. Always holds at least one line;
    every edit recomputes the touched line.
    """

    def __init__(self, draft: BillDraftIn | None = None):
        self._draft = draft.model_copy(deep=True) if draft else BillDraftIn()
        if not self._draft.items:
            self._draft.items = [BillLineIn()]
        self._lines: List[BillLineOut] = [compute_line(ln) for ln in self._draft.items]

    @property
    def lines(self) -> List[BillLineOut]:
        return list(self._lines)

    def set_header(self, **fields: Any) -> None:
        if "items" in fields:
            raise ValueError("Lines are changed through the line methods")
        self._draft = self._draft.model_validate({
            **self._draft.model_dump(),
            **fields
        })

    def add_item(self) -> int:
        line = BillLineIn()
        self._draft.items.append(line)
        self._lines.append(compute_line(line))
        return len(self._lines) - 1

    def update_item(self, index: int, **fields: Any) -> BillLineOut:
        current = self._draft.items[index]
        updated = BillLineIn.model_validate({**current.model_dump(), **fields})
        self._draft.items[index] = updated
        self._lines[index] = compute_line(updated)
        return self._lines[index]

    def remove_item(self, index: int) -> bool:
        if len(self._draft.items) <= 1:
            return False
        del self._draft.items[index]
        del self._lines[index]
        return True

    def to_draft(self) -> BillDraftIn:
        return self._draft.model_copy(deep=True)

    def preview(self) -> BillPreviewOut:
        return preview_bill(self._draft)
