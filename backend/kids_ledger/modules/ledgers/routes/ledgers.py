import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kids_ledger.db import GetDb
from kids_ledger.modules.ledgers.routes.shared import (
    BuildFullLedgerOut,
    BuildLedgerOut,
    HandleDbError,
    HandleLedgerError,
    NotFound,
)
from kids_ledger.modules.ledgers.schemas import FullLedgerOut, LedgerCreate, LedgerOut, LedgerUpdate
from kids_ledger.modules.ledgers.services.errors import CreationFailureError
from kids_ledger.modules.ledgers.services.query_service import GetFullLedger
from kids_ledger.modules.ledgers.services.store_service import (
    CreateLedger,
    DeleteLedger,
    UpdateLedger,
)

router = APIRouter()
logger = logging.getLogger("ledgers.ledgers")


@router.post("", response_model=LedgerOut, status_code=status.HTTP_201_CREATED)
def CreateLedgerRoute(payload: LedgerCreate, db: Session = Depends(GetDb)) -> LedgerOut:
    try:
        return BuildLedgerOut(CreateLedger(db, payload.Name))
    except ValueError as exc:
        HandleLedgerError(exc)
    except CreationFailureError as exc:
        logger.exception("ledger creation failed")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Ledger could not be created",
        ) from exc
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.get("/{ledger_id}", response_model=FullLedgerOut)
def GetLedgerRoute(ledger_id: str, db: Session = Depends(GetDb)) -> FullLedgerOut:
    try:
        full = GetFullLedger(db, ledger_id)
        if not full:
            raise NotFound("Ledger")
        return BuildFullLedgerOut(full)
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.patch("/{ledger_id}", response_model=LedgerOut)
def UpdateLedgerRoute(
    ledger_id: str,
    payload: LedgerUpdate,
    db: Session = Depends(GetDb),
) -> LedgerOut:
    try:
        record = UpdateLedger(db, ledger_id, payload.model_dump(exclude_unset=True))
        if not record:
            raise NotFound("Ledger")
        return BuildLedgerOut(record)
    except ValueError as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.delete("/{ledger_id}", status_code=status.HTTP_204_NO_CONTENT)
def DeleteLedgerRoute(ledger_id: str, db: Session = Depends(GetDb)) -> None:
    try:
        if not DeleteLedger(db, ledger_id):
            raise NotFound("Ledger")
    except SQLAlchemyError as exc:
        HandleDbError(exc)
