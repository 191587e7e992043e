import logging

from fastapi import HTTPException, status

from kids_ledger.modules.ledgers.models import Account, Kid, Ledger
from kids_ledger.modules.ledgers.schemas import (
    AccountOut,
    FullLedgerOut,
    KidOut,
    KidWithAccountsOut,
    LedgerOut,
)
from kids_ledger.modules.ledgers.services.errors import NeighborNotFoundError, ParentNotFoundError
from kids_ledger.modules.ledgers.services.query_service import FullLedger

logger = logging.getLogger("ledgers.routes")


def HandleDbError(exc: Exception) -> None:
    logger.exception("ledger storage error")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Ledger storage unavailable. Try again shortly.",
    ) from exc


def HandleLedgerError(exc: Exception) -> None:
    detail = str(exc)
    if isinstance(exc, ParentNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail) from exc
    if isinstance(exc, NeighborNotFoundError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Reorder neighbor not found: {detail}",
        ) from exc
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail) from exc


def NotFound(label: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label} not found")


def BuildLedgerOut(record: Ledger) -> LedgerOut:
    return LedgerOut(
        Id=record.Id,
        Name=record.Name,
        CreatedAt=record.CreatedAt,
        UpdatedAt=record.UpdatedAt,
    )


def BuildKidOut(record: Kid) -> KidOut:
    return KidOut(
        Id=record.Id,
        LedgerId=record.LedgerId,
        Name=record.Name,
        Emoji=record.Emoji,
        SortOrder=record.SortOrder,
        CreatedAt=record.CreatedAt,
        UpdatedAt=record.UpdatedAt,
    )


def BuildAccountOut(record: Account) -> AccountOut:
    return AccountOut(
        Id=record.Id,
        KidId=record.KidId,
        Name=record.Name,
        Balance=float(record.Balance),
        SortOrder=record.SortOrder,
        CreatedAt=record.CreatedAt,
        UpdatedAt=record.UpdatedAt,
    )


def BuildFullLedgerOut(full: FullLedger) -> FullLedgerOut:
    return FullLedgerOut(
        **BuildLedgerOut(full.Ledger).model_dump(),
        Kids=[
            KidWithAccountsOut(
                **BuildKidOut(entry.Kid).model_dump(),
                Accounts=[BuildAccountOut(account) for account in entry.Accounts],
            )
            for entry in full.Kids
        ],
    )
