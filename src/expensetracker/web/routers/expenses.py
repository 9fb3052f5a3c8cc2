"""Expense endpoints. All of them act on the authenticated caller's records only."""

from fastapi import APIRouter
from pydantic import BaseModel, Field, StrictFloat, StrictInt

from expensetracker.core.modules.expense.models import Expense
from expensetracker.web.deps import AppDep, AuthTokenDep
from expensetracker.web.openapi import ErrorResponse

router: APIRouter = APIRouter(prefix="/expenses", tags=["expenses"])

AUTH_RESPONSES: dict[int | str, dict[str, object]] = {
    401: {"model": ErrorResponse, "description": "Missing or invalid token"},
    403: {"model": ErrorResponse, "description": "Token expired"},
}


class CreateExpenseRequest(BaseModel):
    """Request to record a new expense."""

    description: str = Field(..., min_length=1, description="What the money was spent on")
    amount: StrictInt | StrictFloat = Field(..., description="Positive amount spent")


class ExpenseResponse(BaseModel):
    data: Expense


class ExpenseListResponse(BaseModel):
    data: list[Expense]
    count: int = Field(..., ge=0, description="Number of expenses returned")


@router.get(
    "",
    summary="List expenses",
    description="Get the caller's expenses, most recent first.",
    operation_id="listExpenses",
    responses={200: {"description": "Caller's expenses"}, **AUTH_RESPONSES},
)
async def list_expenses(app: AppDep, auth_token: AuthTokenDep) -> ExpenseListResponse:
    expenses = await app.get_expenses(auth_token)
    return ExpenseListResponse(data=expenses, count=len(expenses))


@router.post(
    "",
    summary="Create expense",
    description="Record a new expense owned by the caller, dated now.",
    operation_id="createExpense",
    status_code=201,
    responses={
        201: {"description": "Expense created"},
        400: {"model": ErrorResponse, "description": "Invalid description or amount"},
        **AUTH_RESPONSES,
    },
)
async def create_expense(request: CreateExpenseRequest, app: AppDep, auth_token: AuthTokenDep) -> ExpenseResponse:
    expense = await app.create_expense(auth_token, request.description, request.amount)
    return ExpenseResponse(data=expense)


@router.delete(
    "/{expense_id}",
    summary="Delete expense",
    description="Delete one of the caller's expenses. Expenses of other users are reported as not found.",
    operation_id="deleteExpense",
    responses={
        200: {"description": "Expense deleted"},
        400: {"model": ErrorResponse, "description": "Malformed expense ID"},
        404: {"model": ErrorResponse, "description": "Expense not found"},
        **AUTH_RESPONSES,
    },
)
async def delete_expense(expense_id: str, app: AppDep, auth_token: AuthTokenDep) -> ExpenseResponse:
    expense = await app.delete_expense(auth_token, expense_id)
    return ExpenseResponse(data=expense)
