from werkzeug.exceptions import BadRequest, Forbidden, NotFound, Unauthorized


class Unauthenticated(Unauthorized):
    description = "Unauthorized"


class InvalidCredentials(Unauthorized):
    description = "Invalid email or password"


class NotOwner(Forbidden):
    description = "Forbidden"


class InvalidJSON(BadRequest):
    description = "Invalid JSON"


class CategoryRequired(BadRequest):
    description = "Category is required"


class EmailAlreadyRegistered(BadRequest):
    description = "Email already registered"


class PayloadValidationError(BadRequest):
    """Schema validation failed; ``details`` lists the offending fields."""

    description = "Validation failed"

    def __init__(self, details=None):
        super().__init__()
        self.details = details or []

    @classmethod
    def from_pydantic(cls, exc):
        details = []
        for err in exc.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or None
            details.append({"field": field, "message": err.get("msg", "")})
        return cls(details)


class CategoryNotFound(NotFound):
    description = "Category not found"


class ExpenseNotFound(NotFound):
    description = "Expense not found"


def error_body(exc):
    body = {"error": exc.description}
    details = getattr(exc, "details", None)
    if details:
        body["details"] = details
    return body
