"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class InvalidInputError(Exception):
    """Raised when a request is missing required fields or carries bad values."""

    def __init__(self, message: str, fields: list[str] | None = None):
        self.fields = fields or []
        super().__init__(message)

    @classmethod
    def missing(cls, fields: list[str]) -> "InvalidInputError":
        return cls(f"Missing required fields: {', '.join(fields)}", fields=fields)


class InvalidSnippetStateError(Exception):
    """Raised when a stored snippet holds data that cannot be interpreted."""


class SnippetExpiredError(Exception):
    """Raised when reading a snippet whose expiry date has passed."""

    def __init__(self, snippet_id: str):
        self.snippet_id = snippet_id
        super().__init__("Snippet expired")


class UnauthorizedError(Exception):
    """Raised when a supplied snippet password does not match."""

    def __init__(self, message: str = "Incorrect password"):
        super().__init__(message)
