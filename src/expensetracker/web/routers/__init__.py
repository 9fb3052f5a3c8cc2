from expensetracker.web.routers.auth import router as auth_router
from expensetracker.web.routers.expenses import router as expenses_router

__all__ = [
    "auth_router",
    "expenses_router",
]
