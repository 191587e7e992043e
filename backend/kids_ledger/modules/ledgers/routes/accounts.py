import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kids_ledger.db import GetDb
from kids_ledger.modules.ledgers.routes.shared import (
    BuildAccountOut,
    HandleDbError,
    HandleLedgerError,
    NotFound,
)
from kids_ledger.modules.ledgers.schemas import (
    AccountCreate,
    AccountOut,
    AccountUpdate,
    BalanceUpdate,
    ReorderRequest,
)
from kids_ledger.modules.ledgers.services.balance_service import UpdateBalance
from kids_ledger.modules.ledgers.services.store_service import (
    CreateAccount,
    DeleteAccount,
    ReorderAccount,
    UpdateAccount,
)

router = APIRouter()
logger = logging.getLogger("ledgers.accounts")


@router.post(
    "/{ledger_id}/kids/{kid_id}/accounts",
    response_model=AccountOut,
    status_code=status.HTTP_201_CREATED,
)
def CreateAccountRoute(
    ledger_id: str,
    kid_id: int,
    payload: AccountCreate,
    db: Session = Depends(GetDb),
) -> AccountOut:
    try:
        record = CreateAccount(db, kid_id, payload.Name, payload.Balance, ledger_id=ledger_id)
        return BuildAccountOut(record)
    except (ValueError, LookupError) as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.patch("/{ledger_id}/accounts/{account_id}", response_model=AccountOut)
def UpdateAccountRoute(
    ledger_id: str,
    account_id: int,
    payload: AccountUpdate,
    db: Session = Depends(GetDb),
) -> AccountOut:
    try:
        record = UpdateAccount(
            db, account_id, payload.model_dump(exclude_unset=True), ledger_id=ledger_id
        )
        if not record:
            raise NotFound("Account")
        return BuildAccountOut(record)
    except ValueError as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.delete("/{ledger_id}/accounts/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
def DeleteAccountRoute(ledger_id: str, account_id: int, db: Session = Depends(GetDb)) -> None:
    try:
        if not DeleteAccount(db, account_id, ledger_id=ledger_id):
            raise NotFound("Account")
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.post("/{ledger_id}/accounts/{account_id}/balance", response_model=AccountOut)
def UpdateBalanceRoute(
    ledger_id: str,
    account_id: int,
    payload: BalanceUpdate,
    db: Session = Depends(GetDb),
) -> AccountOut:
    try:
        record = UpdateBalance(
            db,
            account_id,
            payload.Amount,
            payload.Operation.value,
            ledger_id=ledger_id,
        )
        if not record:
            raise NotFound("Account")
        logger.info("balance %s on account %s", payload.Operation.value, account_id)
        return BuildAccountOut(record)
    except ValueError as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.post("/{ledger_id}/accounts/{account_id}/reorder", response_model=AccountOut)
def ReorderAccountRoute(
    ledger_id: str,
    account_id: int,
    payload: ReorderRequest,
    db: Session = Depends(GetDb),
) -> AccountOut:
    try:
        record = ReorderAccount(
            db,
            account_id,
            before_id=payload.BeforeId,
            after_id=payload.AfterId,
            ledger_id=ledger_id,
        )
        if not record:
            raise NotFound("Account")
        return BuildAccountOut(record)
    except (ValueError, LookupError) as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)
