"""Fractional sort keys for sibling collections.

An item is moved by naming its new left neighbor (``before_id``) and/or its new
right neighbor (``after_id``). Only the moved row is written, except when two
neighbor keys have become indistinguishable: then the sibling set is renumbered
once and the key is recomputed.

Read order is always ``(SortOrder, Id)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from kids_ledger.modules.ledgers.models import Account, Kid
from kids_ledger.modules.ledgers.services.errors import NeighborNotFoundError
from kids_ledger.modules.ledgers.utils.dates import NowUtc
from kids_ledger.modules.ledgers.utils.session import CommitSession
from kids_ledger.modules.ledgers.utils.validation import CoerceOptionalId

logger = logging.getLogger("ledgers.ordering")

FRONT_SORT_ORDER = 0.0
APPEND_STEP = 1.0


@dataclass(frozen=True)
class SiblingOrdering:
    Model: type
    ParentColumn: str
    Label: str

    def ParentAttr(self):
        return getattr(self.Model, self.ParentColumn)

    def ParentOf(self, record):
        return getattr(record, self.ParentColumn)


KID_ORDERING = SiblingOrdering(Model=Kid, ParentColumn="LedgerId", Label="kid")
ACCOUNT_ORDERING = SiblingOrdering(Model=Account, ParentColumn="KidId", Label="account")


def ComputeSortOrder(before_key: float | None, after_key: float | None) -> float:
    if before_key is None and after_key is None:
        return FRONT_SORT_ORDER
    if before_key is None:
        return after_key / 2
    if after_key is None:
        return before_key + APPEND_STEP
    return (before_key + after_key) / 2


def _IsExhausted(key: float, before_key: float, after_key: float) -> bool:
    low, high = min(before_key, after_key), max(before_key, after_key)
    return not (low < key < high)


def _SiblingsQuery(db: Session, ordering: SiblingOrdering, parent_id):
    return db.query(ordering.Model).filter(ordering.ParentAttr() == parent_id)


def ListSiblings(db: Session, ordering: SiblingOrdering, parent_id) -> list:
    return (
        _SiblingsQuery(db, ordering, parent_id)
        .order_by(ordering.Model.SortOrder.asc(), ordering.Model.Id.asc())
        .all()
    )


def NextSortOrder(db: Session, ordering: SiblingOrdering, parent_id) -> float:
    max_sort = (
        db.query(func.max(ordering.Model.SortOrder))
        .filter(ordering.ParentAttr() == parent_id)
        .scalar()
    )
    if max_sort is None:
        return APPEND_STEP
    return float(max_sort) + APPEND_STEP


def _RenumberInSession(db: Session, ordering: SiblingOrdering, parent_id) -> int:
    siblings = ListSiblings(db, ordering, parent_id)
    for index, sibling in enumerate(siblings, start=1):
        sibling.SortOrder = float(index)
        db.add(sibling)
    db.flush()
    return len(siblings)


def RenumberSiblings(db: Session, ordering: SiblingOrdering, parent_id) -> int:
    count = _RenumberInSession(db, ordering, parent_id)
    CommitSession(db)
    logger.info("renumbered %s %s rows (parent=%s)", count, ordering.Label, parent_id)
    return count


def _LoadNeighbor(db: Session, ordering: SiblingOrdering, target, neighbor_id: int | None, label: str):
    if neighbor_id is None:
        return None
    if neighbor_id == target.Id:
        raise NeighborNotFoundError(f"{label} cannot be the item being moved")
    neighbor = (
        _SiblingsQuery(db, ordering, ordering.ParentOf(target))
        .filter(ordering.Model.Id == neighbor_id)
        .first()
    )
    if not neighbor:
        raise NeighborNotFoundError(f"{label} {neighbor_id} is not a sibling {ordering.Label}")
    return neighbor


def MoveBetween(
    db: Session,
    ordering: SiblingOrdering,
    target,
    before_id: int | None = None,
    after_id: int | None = None,
):
    before_id = CoerceOptionalId(before_id, "BeforeId")
    after_id = CoerceOptionalId(after_id, "AfterId")
    before = _LoadNeighbor(db, ordering, target, before_id, "BeforeId")
    after = _LoadNeighbor(db, ordering, target, after_id, "AfterId")

    key = ComputeSortOrder(
        before.SortOrder if before else None,
        after.SortOrder if after else None,
    )
    if before and after and _IsExhausted(key, before.SortOrder, after.SortOrder):
        logger.info(
            "sort keys exhausted between %s %s and %s, renumbering",
            ordering.Label,
            before.Id,
            after.Id,
        )
        _RenumberInSession(db, ordering, ordering.ParentOf(target))
        key = ComputeSortOrder(before.SortOrder, after.SortOrder)

    target.SortOrder = key
    target.UpdatedAt = NowUtc()
    db.add(target)
    CommitSession(db)
    db.refresh(target)
    logger.debug("moved %s %s to sort order %s", ordering.Label, target.Id, key)
    return target
