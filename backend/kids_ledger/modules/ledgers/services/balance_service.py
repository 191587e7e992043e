import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from kids_ledger.modules.ledgers.models import Account, Kid
from kids_ledger.modules.ledgers.utils.dates import NowUtc
from kids_ledger.modules.ledgers.utils.session import CommitSession
from kids_ledger.modules.ledgers.utils.validation import (
    CoerceId,
    ValidateOperation,
    ValidatePositiveAmount,
)

logger = logging.getLogger("ledgers.balance")


def SignedDelta(amount: Decimal, operation: str) -> Decimal:
    return amount if operation == "add" else -amount


def UpdateBalance(
    db: Session,
    account_id: int,
    amount: Decimal | float | int,
    operation: str,
    ledger_id: str | None = None,
) -> Account | None:
    """Add or remove ``amount`` from an account balance.

    The increment is a single UPDATE evaluated by the database, so concurrent
    calls against the same account never lose each other's delta. Balances are
    allowed to go negative.
    """
    account_id = CoerceId(account_id, "AccountId")
    delta = SignedDelta(ValidatePositiveAmount(amount), ValidateOperation(operation))

    query = db.query(Account).filter(Account.Id == account_id)
    if ledger_id is not None:
        kid_ids = select(Kid.Id).where(Kid.LedgerId == ledger_id.strip())
        query = query.filter(Account.KidId.in_(kid_ids))
    updated = query.update(
        {
            Account.Balance: Account.Balance + delta,
            Account.UpdatedAt: NowUtc(),
        },
        synchronize_session=False,
    )
    CommitSession(db)
    if not updated:
        logger.debug("balance update skipped, account %s not found", account_id)
        return None

    record = db.query(Account).populate_existing().filter(Account.Id == account_id).first()
    logger.debug("account %s balance changed by %s", account_id, delta)
    return record
