from ..errors import CategoryNotFound, CategoryRequired
from ..repositories import CategoryRepository

DEFAULT_CATEGORIES = [
    "Housing",
    "Transportation",
    "Food",
    "Utilities",
    "Healthcare",
    "Insurance",
    "Entertainment",
    "Shopping",
    "Education",
    "Debt Payments",
    "Other",
]


class CategoryService:
    def __init__(self, session):
        self.categories = CategoryRepository(session)

    def find_by_name(self, name):
        """Exact-match lookup. Returns None when no category has that name."""
        if not name:
            return None
        return self.categories.find_by_name(name)

    def resolve(self, name):
        if not name:
            raise CategoryRequired()
        category = self.find_by_name(name)
        if category is None:
            raise CategoryNotFound()
        return category

    def list_names(self):
        return [c.name for c in self.categories.all()]

    def seed_defaults(self, names=None):
        return self.categories.add_missing(names or DEFAULT_CATEGORIES)
