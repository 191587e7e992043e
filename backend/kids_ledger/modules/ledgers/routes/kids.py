import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from kids_ledger.db import GetDb
from kids_ledger.modules.ledgers.routes.shared import (
    BuildKidOut,
    HandleDbError,
    HandleLedgerError,
    NotFound,
)
from kids_ledger.modules.ledgers.schemas import KidCreate, KidOut, KidUpdate, ReorderRequest
from kids_ledger.modules.ledgers.services.store_service import (
    CreateKid,
    DeleteKid,
    ReorderKid,
    UpdateKid,
)

router = APIRouter()
logger = logging.getLogger("ledgers.kids")


@router.post("/{ledger_id}/kids", response_model=KidOut, status_code=status.HTTP_201_CREATED)
def CreateKidRoute(ledger_id: str, payload: KidCreate, db: Session = Depends(GetDb)) -> KidOut:
    try:
        return BuildKidOut(CreateKid(db, ledger_id, payload.Name, payload.Emoji))
    except (ValueError, LookupError) as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.patch("/{ledger_id}/kids/{kid_id}", response_model=KidOut)
def UpdateKidRoute(
    ledger_id: str,
    kid_id: int,
    payload: KidUpdate,
    db: Session = Depends(GetDb),
) -> KidOut:
    try:
        record = UpdateKid(db, kid_id, payload.model_dump(exclude_unset=True), ledger_id=ledger_id)
        if not record:
            raise NotFound("Kid")
        return BuildKidOut(record)
    except ValueError as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.delete("/{ledger_id}/kids/{kid_id}", status_code=status.HTTP_204_NO_CONTENT)
def DeleteKidRoute(ledger_id: str, kid_id: int, db: Session = Depends(GetDb)) -> None:
    try:
        if not DeleteKid(db, kid_id, ledger_id=ledger_id):
            raise NotFound("Kid")
    except SQLAlchemyError as exc:
        HandleDbError(exc)


@router.post("/{ledger_id}/kids/{kid_id}/reorder", response_model=KidOut)
def ReorderKidRoute(
    ledger_id: str,
    kid_id: int,
    payload: ReorderRequest,
    db: Session = Depends(GetDb),
) -> KidOut:
    try:
        record = ReorderKid(
            db,
            kid_id,
            before_id=payload.BeforeId,
            after_id=payload.AfterId,
            ledger_id=ledger_id,
        )
        if not record:
            raise NotFound("Kid")
        return BuildKidOut(record)
    except (ValueError, LookupError) as exc:
        HandleLedgerError(exc)
    except SQLAlchemyError as exc:
        HandleDbError(exc)
