import logging

from fastapi import APIRouter

from kids_ledger.modules.ledgers.routes.accounts import router as accounts_router
from kids_ledger.modules.ledgers.routes.kids import router as kids_router
from kids_ledger.modules.ledgers.routes.ledgers import router as ledgers_router

router = APIRouter(prefix="/api", tags=["ledgers"])
logger = logging.getLogger("ledgers")

router.include_router(ledgers_router, prefix="/ledgers")
router.include_router(kids_router, prefix="/ledgers", tags=["ledger-kids"])
router.include_router(accounts_router, prefix="/ledgers", tags=["ledger-accounts"])
