# medassist/domain/errors.py


class MedAssistError(Exception):
    """Base error for everything the service raises on purpose."""


class InputError(MedAssistError):
    """Bad query name or unknown model id. Maps to a client error."""


class SuggestionServiceError(MedAssistError):
    """Non-transient failure of the external suggestion call."""

    def __init__(self, message: str, *, model: str | None = None):
        super().__init__(message)
        self.message = message
        self.model = model


class DuplicateMedicationError(MedAssistError):
    def __init__(self, name: str):
        super().__init__(f"Medicine '{name}' already exists.")
        self.name = name
