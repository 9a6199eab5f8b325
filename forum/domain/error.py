"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class SubmissionNotLoadedError(NotFoundError):
    """Raised when reading comment state for a submission that was never loaded."""

    def __init__(self, submission_id: int):
        super().__init__("Submission comments", str(submission_id))
