"""Main v1 router aggregator"""
from fastapi import APIRouter

from splitledger.api.v1 import balances, currencies, expenses, settlements, splits

# Create v1 router
api_router = APIRouter()

# Include all v1 routers
api_router.include_router(splits.router)
api_router.include_router(expenses.router)
api_router.include_router(settlements.router)
api_router.include_router(balances.router)
api_router.include_router(currencies.router)
