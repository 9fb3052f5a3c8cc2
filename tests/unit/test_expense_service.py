"""Tests for owner-scoped expense operations."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest

from expensetracker.core.modules.expense.models import Expense
from expensetracker.core.modules.token.models import Identity
from expensetracker.errors import NotFoundError, ValidationError
from expensetracker.utils import now_ms
from tests.fakes import bson_round_trip

pytestmark = pytest.mark.anyio

ALICE = Identity(user_id=uuid4(), username="alice")
BOB = Identity(user_id=uuid4(), username="bob")


@pytest.fixture
def expenses(core):
    return core.services.expense


@pytest.fixture
def expenses_collection(database):
    return database.get_collection("expenses")


async def test_create_assigns_owner_id_and_date(expenses):
    before = now_ms()
    expense = await expenses.create_expense(ALICE, " coffee ", 3.50)

    assert expense.owner_id == ALICE.user_id
    assert expense.description == "coffee"
    assert expense.amount == 3.5
    assert expense.date >= before

    listed = await expenses.list_expenses(ALICE)
    assert [e.id for e in listed] == [expense.id]


@pytest.mark.parametrize(("description", "amount"), [("", 1.0), ("  ", 1.0), ("coffee", 0), ("coffee", -2.0)])
async def test_create_rejects_invalid_input(expenses, expenses_collection, description, amount):
    with pytest.raises(ValidationError):
        await expenses.create_expense(ALICE, description, amount)
    assert expenses_collection.documents == []


async def test_list_is_most_recent_first(expenses, expenses_collection):
    base = datetime(2026, 3, 1, tzinfo=UTC)
    for days, description in [(1, "middle"), (0, "oldest"), (2, "newest")]:
        expense = Expense(owner_id=ALICE.user_id, description=description, amount=1.0, date=base + timedelta(days=days))
        await expenses_collection.insert_one(expense.to_mongo())

    listed = await expenses.list_expenses(ALICE)
    assert [e.description for e in listed] == ["newest", "middle", "oldest"]


async def test_users_never_see_each_others_expenses(expenses):
    await expenses.create_expense(ALICE, "coffee", 3.5)
    await expenses.create_expense(BOB, "tea", 2.0)

    assert [e.description for e in await expenses.list_expenses(ALICE)] == ["coffee"]
    assert [e.description for e in await expenses.list_expenses(BOB)] == ["tea"]


async def test_delete_returns_removed_record(expenses):
    expense = await expenses.create_expense(ALICE, "coffee", 3.5)

    deleted = await expenses.delete_expense(ALICE, expense.id)

    assert deleted.id == expense.id
    assert deleted.description == "coffee"
    assert await expenses.list_expenses(ALICE) == []


async def test_second_delete_is_not_found(expenses):
    expense = await expenses.create_expense(ALICE, "coffee", 3.5)
    await expenses.delete_expense(ALICE, expense.id)

    with pytest.raises(NotFoundError):
        await expenses.delete_expense(ALICE, expense.id)


async def test_foreign_delete_looks_like_missing(expenses):
    expense = await expenses.create_expense(ALICE, "coffee", 3.5)

    with pytest.raises(NotFoundError) as foreign:
        await expenses.delete_expense(BOB, expense.id)
    with pytest.raises(NotFoundError) as missing:
        await expenses.delete_expense(BOB, uuid4())

    assert str(foreign.value) == str(missing.value)
    assert len(await expenses.list_expenses(ALICE)) == 1


def test_default_date_survives_bson_storage():
    expense = Expense(owner_id=ALICE.user_id, description="coffee", amount=3.5)

    stored = Expense.model_validate(bson_round_trip(expense.to_mongo()))

    assert expense.date.microsecond % 1000 == 0
    assert stored == expense


async def test_created_expense_matches_listed_record(expenses):
    created = await expenses.create_expense(ALICE, "coffee", 3.5)

    [listed] = await expenses.list_expenses(ALICE)

    assert listed == created
    assert listed.model_dump_json(by_alias=True) == created.model_dump_json(by_alias=True)
