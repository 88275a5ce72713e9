class BugStoreError(Exception):
    """Base class for every failure the bug store signals to its callers."""

    kind = "BugStoreError"


class ValidationError(BugStoreError):
    kind = "ValidationError"

    def __init__(self, errors: list[dict[str, str]]):
        self.errors = errors
        super().__init__(", ".join(f"{e['field']}: {e['message']}" for e in errors))

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]


class MissingRequiredField(BugStoreError):
    kind = "MissingRequiredField"

    def __init__(self, fields: list[str], message: str | None = None):
        self.fields = fields
        super().__init__(message or f"Missing required fields: {', '.join(fields)}")


class InvalidIdentifier(BugStoreError):
    kind = "InvalidIdentifier"

    def __init__(self, raw_id):
        self.raw_id = raw_id
        super().__init__("Invalid bug ID format")


class NotFound(BugStoreError):
    kind = "NotFound"

    def __init__(self, bug_id: int):
        self.bug_id = bug_id
        super().__init__("Bug not found")


class InvalidStatus(BugStoreError):
    kind = "InvalidStatus"

    def __init__(self, value):
        self.value = value
        super().__init__("Status must be Open, In Progress, or Resolved")
