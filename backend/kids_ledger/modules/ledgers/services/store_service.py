from __future__ import annotations

import logging
import secrets
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from kids_ledger.modules.ledgers.models import Account, Kid, Ledger
from kids_ledger.modules.ledgers.services.errors import CreationFailureError, ParentNotFoundError
from kids_ledger.modules.ledgers.services.ordering_service import (
    ACCOUNT_ORDERING,
    KID_ORDERING,
    ListSiblings,
    MoveBetween,
    NextSortOrder,
    RenumberSiblings,
)
from kids_ledger.modules.ledgers.utils.dates import NowUtc
from kids_ledger.modules.ledgers.utils.session import CommitSession
from kids_ledger.modules.ledgers.utils.validation import (
    CoerceAmount,
    CoerceId,
    CoerceOptionalId,
    ValidateEmoji,
    ValidateName,
)

logger = logging.getLogger("ledgers.store")

LEDGER_ID_BYTES = 16


def NewLedgerId() -> str:
    return secrets.token_hex(LEDGER_ID_BYTES)


def _NormalizeLedgerId(ledger_id: str | None) -> str | None:
    if not isinstance(ledger_id, str):
        return None
    normalized = ledger_id.strip()
    return normalized or None


def _ApplyChanges(record, changes: dict[str, Any]) -> bool:
    changed = False
    for key, value in changes.items():
        if getattr(record, key) != value:
            setattr(record, key, value)
            changed = True
    return changed


def _Persist(db: Session, record, changes: dict[str, Any]):
    # An empty or unchanged patch is a plain read.
    if not _ApplyChanges(record, changes):
        return record
    record.UpdatedAt = NowUtc()
    db.add(record)
    CommitSession(db)
    db.refresh(record)
    return record


# Ledgers


def CreateLedger(db: Session, name: str) -> Ledger:
    normalized = ValidateName(name)
    now = NowUtc()
    ledger_id = NewLedgerId()
    record = Ledger(Id=ledger_id, Name=normalized, CreatedAt=now, UpdatedAt=now)
    db.add(record)
    CommitSession(db)
    created = db.query(Ledger).filter(Ledger.Id == ledger_id).first()
    if created is None:
        raise CreationFailureError("Ledger was not returned after insert")
    logger.info("ledger created (id=%s...)", ledger_id[:6])
    return created


def GetLedger(db: Session, ledger_id: str) -> Ledger | None:
    normalized = _NormalizeLedgerId(ledger_id)
    if not normalized:
        return None
    return db.query(Ledger).filter(Ledger.Id == normalized).first()


def UpdateLedger(db: Session, ledger_id: str, input_data: dict[str, Any]) -> Ledger | None:
    changes: dict[str, Any] = {}
    if input_data.get("Name") is not None:
        changes["Name"] = ValidateName(input_data["Name"])
    record = GetLedger(db, ledger_id)
    if not record:
        return None
    return _Persist(db, record, changes)


def DeleteLedger(db: Session, ledger_id: str) -> bool:
    normalized = _NormalizeLedgerId(ledger_id)
    if not normalized:
        return False
    # Kids and accounts go with the ledger through ON DELETE CASCADE.
    deleted = (
        db.query(Ledger)
        .filter(Ledger.Id == normalized)
        .delete(synchronize_session=False)
    )
    CommitSession(db)
    if deleted:
        logger.info("ledger deleted (id=%s...)", normalized[:6])
    return bool(deleted)


# Kids


def CreateKid(db: Session, ledger_id: str, name: str, emoji: str) -> Kid:
    normalized_name = ValidateName(name)
    normalized_emoji = ValidateEmoji(emoji)
    ledger = GetLedger(db, ledger_id)
    if not ledger:
        raise ParentNotFoundError("Ledger not found")
    now = NowUtc()
    record = Kid(
        LedgerId=ledger.Id,
        Name=normalized_name,
        Emoji=normalized_emoji,
        SortOrder=NextSortOrder(db, KID_ORDERING, ledger.Id),
        CreatedAt=now,
        UpdatedAt=now,
    )
    db.add(record)
    db.flush()
    if record.Id is None:
        db.rollback()
        raise CreationFailureError("Kid was not assigned an id on insert")
    CommitSession(db)
    db.refresh(record)
    logger.debug("kid created (id=%s)", record.Id)
    return record


def GetKid(db: Session, kid_id: int, ledger_id: str | None = None) -> Kid | None:
    query = db.query(Kid).filter(Kid.Id == CoerceId(kid_id, "KidId"))
    if ledger_id is not None:
        query = query.filter(Kid.LedgerId == _NormalizeLedgerId(ledger_id))
    return query.first()


def ListKids(db: Session, ledger_id: str) -> list[Kid]:
    return ListSiblings(db, KID_ORDERING, _NormalizeLedgerId(ledger_id))


def UpdateKid(
    db: Session,
    kid_id: int,
    input_data: dict[str, Any],
    ledger_id: str | None = None,
) -> Kid | None:
    changes: dict[str, Any] = {}
    if input_data.get("Name") is not None:
        changes["Name"] = ValidateName(input_data["Name"])
    if input_data.get("Emoji") is not None:
        changes["Emoji"] = ValidateEmoji(input_data["Emoji"])
    record = GetKid(db, kid_id, ledger_id=ledger_id)
    if not record:
        return None
    return _Persist(db, record, changes)


def DeleteKid(db: Session, kid_id: int, ledger_id: str | None = None) -> bool:
    query = db.query(Kid).filter(Kid.Id == CoerceId(kid_id, "KidId"))
    if ledger_id is not None:
        query = query.filter(Kid.LedgerId == _NormalizeLedgerId(ledger_id))
    deleted = query.delete(synchronize_session=False)
    CommitSession(db)
    return bool(deleted)


def ReorderKid(
    db: Session,
    kid_id: int,
    before_id: int | None = None,
    after_id: int | None = None,
    ledger_id: str | None = None,
) -> Kid | None:
    before_id = CoerceOptionalId(before_id, "BeforeId")
    after_id = CoerceOptionalId(after_id, "AfterId")
    record = GetKid(db, kid_id, ledger_id=ledger_id)
    if not record:
        return None
    return MoveBetween(db, KID_ORDERING, record, before_id=before_id, after_id=after_id)


def RenumberKids(db: Session, ledger_id: str) -> int:
    return RenumberSiblings(db, KID_ORDERING, _NormalizeLedgerId(ledger_id))


# Accounts


def CreateAccount(
    db: Session,
    kid_id: int,
    name: str,
    balance: Decimal | float | int = 0,
    ledger_id: str | None = None,
) -> Account:
    normalized_name = ValidateName(name)
    opening_balance = CoerceAmount(balance, "Balance")
    kid = GetKid(db, kid_id, ledger_id=ledger_id)
    if not kid:
        raise ParentNotFoundError("Kid not found")
    now = NowUtc()
    record = Account(
        KidId=kid.Id,
        Name=normalized_name,
        Balance=opening_balance,
        SortOrder=NextSortOrder(db, ACCOUNT_ORDERING, kid.Id),
        CreatedAt=now,
        UpdatedAt=now,
    )
    db.add(record)
    db.flush()
    if record.Id is None:
        db.rollback()
        raise CreationFailureError("Account was not assigned an id on insert")
    CommitSession(db)
    db.refresh(record)
    logger.debug("account created (id=%s, kid=%s)", record.Id, kid.Id)
    return record


def GetAccount(db: Session, account_id: int, ledger_id: str | None = None) -> Account | None:
    query = db.query(Account).filter(Account.Id == CoerceId(account_id, "AccountId"))
    if ledger_id is not None:
        query = query.join(Kid, Kid.Id == Account.KidId).filter(
            Kid.LedgerId == _NormalizeLedgerId(ledger_id)
        )
    return query.first()


def ListAccounts(db: Session, kid_id: int) -> list[Account]:
    return ListSiblings(db, ACCOUNT_ORDERING, CoerceId(kid_id, "KidId"))


def UpdateAccount(
    db: Session,
    account_id: int,
    input_data: dict[str, Any],
    ledger_id: str | None = None,
) -> Account | None:
    changes: dict[str, Any] = {}
    if input_data.get("Name") is not None:
        changes["Name"] = ValidateName(input_data["Name"])
    record = GetAccount(db, account_id, ledger_id=ledger_id)
    if not record:
        return None
    return _Persist(db, record, changes)


def DeleteAccount(db: Session, account_id: int, ledger_id: str | None = None) -> bool:
    record = GetAccount(db, account_id, ledger_id=ledger_id)
    if not record:
        return False
    deleted = (
        db.query(Account)
        .filter(Account.Id == record.Id)
        .delete(synchronize_session=False)
    )
    CommitSession(db)
    return bool(deleted)


def ReorderAccount(
    db: Session,
    account_id: int,
    before_id: int | None = None,
    after_id: int | None = None,
    ledger_id: str | None = None,
) -> Account | None:
    before_id = CoerceOptionalId(before_id, "BeforeId")
    after_id = CoerceOptionalId(after_id, "AfterId")
    record = GetAccount(db, account_id, ledger_id=ledger_id)
    if not record:
        return None
    return MoveBetween(db, ACCOUNT_ORDERING, record, before_id=before_id, after_id=after_id)


def RenumberAccounts(db: Session, kid_id: int) -> int:
    return RenumberSiblings(db, ACCOUNT_ORDERING, CoerceId(kid_id, "KidId"))
