from sqlalchemy import select

from .models import Category, Expense, User


class UserRepository:
    def __init__(self, session):
        self.session = session

    def get(self, user_id):
        return self.session.get(User, user_id)

    def find_by_email(self, email):
        return self.session.execute(select(User).filter_by(email=email)).scalar_one_or_none()

    def add(self, user):
        self.session.add(user)
        self.session.commit()
        return user

    def delete(self, user):
        self.session.delete(user)
        self.session.commit()


class CategoryRepository:
    def __init__(self, session):
        self.session = session

    def get(self, category_id):
        return self.session.get(Category, category_id)

    def find_by_name(self, name):
        return self.session.execute(select(Category).filter_by(name=name)).scalar_one_or_none()

    def all(self):
        return self.session.execute(select(Category).order_by(Category.id)).scalars().all()

    def add_missing(self, names):
        """Insert the names that do not exist yet; returns how many were created."""
        existing = {c.name for c in self.all()}
        created = 0
        for name in names:
            if name not in existing:
                self.session.add(Category(name=name))
                existing.add(name)
                created += 1
        if created:
            self.session.commit()
        return created


class ExpenseRepository:
    def __init__(self, session):
        self.session = session

    def get(self, expense_id):
        return self.session.get(Expense, expense_id)

    def for_user(self, user_id):
        stmt = select(Expense).filter_by(user_id=user_id).order_by(Expense.id)
        return self.session.execute(stmt).scalars().all()

    def add(self, expense):
        self.session.add(expense)
        self.session.commit()
        return expense

    def save(self):
        self.session.commit()

    def delete(self, expense):
        self.session.delete(expense)
        self.session.commit()
