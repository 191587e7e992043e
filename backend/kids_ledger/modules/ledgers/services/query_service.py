from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from kids_ledger.modules.ledgers.models import Account, Kid, Ledger
from kids_ledger.modules.ledgers.services.store_service import GetLedger, ListKids


@dataclass
class KidWithAccounts:
    Kid: Kid
    Accounts: list[Account] = field(default_factory=list)


@dataclass
class FullLedger:
    Ledger: Ledger
    Kids: list[KidWithAccounts] = field(default_factory=list)


def GetFullLedger(db: Session, ledger_id: str) -> FullLedger | None:
    """Ledger, its kids and each kid's accounts, all in ``(SortOrder, Id)`` order.

    The three reads are separate round trips. A write landing between them can
    show up in one level and not another; there is no snapshot isolation.
    """
    ledger = GetLedger(db, ledger_id)
    if not ledger:
        return None

    kids = ListKids(db, ledger.Id)
    accounts_by_kid: dict[int, list[Account]] = {kid.Id: [] for kid in kids}
    if kids:
        accounts = (
            db.query(Account)
            .filter(Account.KidId.in_(list(accounts_by_kid.keys())))
            .order_by(Account.SortOrder.asc(), Account.Id.asc())
            .all()
        )
        for account in accounts:
            accounts_by_kid[account.KidId].append(account)

    return FullLedger(
        Ledger=ledger,
        Kids=[KidWithAccounts(Kid=kid, Accounts=accounts_by_kid[kid.Id]) for kid in kids],
    )
