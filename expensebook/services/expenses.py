from datetime import date

from flask import current_app
from pydantic import ValidationError

from ..errors import ExpenseNotFound, InvalidJSON, NotOwner, PayloadValidationError
from ..models import Expense
from ..repositories import ExpenseRepository
from ..schemas import ExpenseCreate, ExpenseUpdate
from .categories import CategoryService


class ExpenseService:
    def __init__(self, session):
        self.expenses = ExpenseRepository(session)
        self.categories = CategoryService(session)

    def create(self, user, payload):
        if not isinstance(payload, dict) or not payload:
            raise InvalidJSON()
        try:
            data = ExpenseCreate.model_validate(payload)
        except ValidationError as exc:
            raise PayloadValidationError.from_pydantic(exc)
        category = self.categories.resolve(data.category)

        expense = Expense(
            user_id=user.id,
            category_id=category.id,
            label=data.label,
            amount=data.amount,
            date=data.date or date.today(),
        )
        expense.category = category
        self.expenses.add(expense)
        current_app.logger.info("Created expense id=%s for user id=%s", expense.id, user.id)
        return expense

    def list(self, user):
        return self.expenses.for_user(user.id)

    def get(self, user, expense_id):
        expense = self.expenses.get(expense_id)
        if expense is None:
            raise ExpenseNotFound()
        if expense.user_id != user.id:
            current_app.logger.warning(
                "User id=%s denied access to expense id=%s", user.id, expense_id
            )
            raise NotOwner()
        return expense

    def update(self, user, expense_id, payload):
        expense = self.get(user, expense_id)
        if not isinstance(payload, dict):
            raise InvalidJSON()
        try:
            changes = ExpenseUpdate.model_validate(payload).changes()
        except ValidationError as exc:
            raise PayloadValidationError.from_pydantic(exc)

        # Resolve before touching the record so a bad name leaves it unchanged
        category = None
        if "category" in changes:
            category = self.categories.resolve(changes.pop("category"))

        for field, value in changes.items():
            setattr(expense, field, value)
        if category is not None:
            expense.category_id = category.id
            expense.category = category
        self.expenses.save()
        current_app.logger.info("Updated expense id=%s fields=%s", expense.id, sorted(changes))
        return expense

    def delete(self, user, expense_id):
        expense = self.get(user, expense_id)
        self.expenses.delete(expense)
        current_app.logger.info("Deleted expense id=%s for user id=%s", expense_id, user.id)
