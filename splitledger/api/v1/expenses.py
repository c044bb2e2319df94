"""Expense endpoints"""
from fastapi import APIRouter, status

from splitledger.core.exceptions import ValidationError
from splitledger.models.expense import Expense
from splitledger.schemas.expense import (ExpenseCreateRequest,
                                         ExpenseDeleteRequest,
                                         ExpenseUpdateRequest,
                                         ExpenseUpdateResponse)
from splitledger.services.expense_service import ExpenseService

router = APIRouter(prefix="/expenses", tags=["Expenses"])


def check_path_id(expense_id: str, existing: Expense) -> None:
    if existing.id != expense_id:
        raise ValidationError(
            f"Expense id {existing.id} does not match path id {expense_id}",
            details={"field": "existing.id"},
        )


@router.post("", response_model=Expense, status_code=status.HTTP_201_CREATED)
async def create_expense(request: ExpenseCreateRequest):
    """
    Validate a new expense and calculate its splits.

    Args:
        request: Expense fields plus current group memberships

    Returns:
        Expense ready to be stored

    Raises:
        400: If validation fails (amounts, participants, splits, departed users)
    """
    return ExpenseService.create_expense(request, request.memberships)


@router.put("/{expense_id}", response_model=ExpenseUpdateResponse)
async def update_expense(expense_id: str, request: ExpenseUpdateRequest):
    """
    Produce a new version of an expense.

    Returns:
        The previous version marked as superseded and the new version

    Raises:
        400: If the new fields are invalid
        409: If the expense is locked, deleted or already superseded
    """
    check_path_id(expense_id, request.existing)
    previous, expense = ExpenseService.update_expense(
        request.existing, request.update, request.memberships
    )
    return ExpenseUpdateResponse(previous=previous, expense=expense)


@router.post("/{expense_id}/delete", response_model=Expense)
async def delete_expense(expense_id: str, request: ExpenseDeleteRequest):
    """
    Soft delete an expense.

    Raises:
        409: If the expense is locked, deleted or already superseded
    """
    check_path_id(expense_id, request.existing)
    return ExpenseService.delete_expense(
        request.existing, request.memberships, deleted_by=request.deleted_by
    )
