from .user import User
from .category import Category
from .expense import Expense

__all__ = ["User", "Category", "Expense"]
