from .auth import AuthService
from .categories import CategoryService, DEFAULT_CATEGORIES
from .expenses import ExpenseService

__all__ = ["AuthService", "CategoryService", "DEFAULT_CATEGORIES", "ExpenseService"]
