from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, Numeric, String

from kids_ledger.db import Base
from kids_ledger.modules.ledgers.utils.dates import NowUtc


class Ledger(Base):
    __tablename__ = "ledgers"

    Id = Column(String(64), primary_key=True)
    Name = Column(String(200), nullable=False)
    CreatedAt = Column(DateTime(timezone=True), default=NowUtc, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=NowUtc, nullable=False)


class Kid(Base):
    __tablename__ = "kids"
    __table_args__ = (
        Index("ix_kids_ledger_sort", "LedgerId", "SortOrder"),
    )

    Id = Column(Integer, primary_key=True, index=True)
    LedgerId = Column(
        String(64),
        ForeignKey("ledgers.Id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    Name = Column(String(200), nullable=False)
    Emoji = Column(String(16), nullable=False)
    SortOrder = Column(Float, nullable=False, default=0)
    CreatedAt = Column(DateTime(timezone=True), default=NowUtc, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=NowUtc, nullable=False)


class Account(Base):
    __tablename__ = "accounts"
    __table_args__ = (
        Index("ix_accounts_kid_sort", "KidId", "SortOrder"),
    )

    Id = Column(Integer, primary_key=True, index=True)
    KidId = Column(
        Integer,
        ForeignKey("kids.Id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    Name = Column(String(200), nullable=False)
    Balance = Column(Numeric(12, 2), nullable=False, default=0)
    SortOrder = Column(Float, nullable=False, default=0)
    CreatedAt = Column(DateTime(timezone=True), default=NowUtc, nullable=False)
    UpdatedAt = Column(DateTime(timezone=True), default=NowUtc, nullable=False)
