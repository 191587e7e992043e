from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class BalanceOperation(str, Enum):
    Add = "add"
    Remove = "remove"


class LedgerCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)


class LedgerUpdate(BaseModel):
    Name: str | None = Field(default=None, min_length=1, max_length=200)


class LedgerOut(BaseModel):
    Id: str
    Name: str
    CreatedAt: datetime
    UpdatedAt: datetime


class KidCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)
    Emoji: str = Field(min_length=1, max_length=16)


class KidUpdate(BaseModel):
    Name: str | None = Field(default=None, min_length=1, max_length=200)
    Emoji: str | None = Field(default=None, min_length=1, max_length=16)


class KidOut(BaseModel):
    Id: int
    LedgerId: str
    Name: str
    Emoji: str
    SortOrder: float
    CreatedAt: datetime
    UpdatedAt: datetime


class AccountCreate(BaseModel):
    Name: str = Field(min_length=1, max_length=200)
    Balance: float = 0


class AccountUpdate(BaseModel):
    Name: str | None = Field(default=None, min_length=1, max_length=200)


class AccountOut(BaseModel):
    Id: int
    KidId: int
    Name: str
    Balance: float
    SortOrder: float
    CreatedAt: datetime
    UpdatedAt: datetime


class BalanceUpdate(BaseModel):
    Amount: float = Field(gt=0)
    Operation: BalanceOperation


class ReorderRequest(BaseModel):
    BeforeId: int | None = None
    AfterId: int | None = None


class KidWithAccountsOut(KidOut):
    Accounts: list[AccountOut]


class FullLedgerOut(LedgerOut):
    Kids: list[KidWithAccountsOut]
