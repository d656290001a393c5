"""Errors raised by the application workflow.

Views catch ``WorkflowError`` and surface ``str(exc)`` as a flash message.
"""


class WorkflowError(Exception):
    default_message = "Something went wrong."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class Unauthenticated(WorkflowError):
    default_message = "Please sign in to continue."


class Forbidden(WorkflowError):
    default_message = "Access denied."


class NotFound(WorkflowError):
    default_message = "Not found."


class DuplicateApplication(WorkflowError):
    default_message = "You already applied to this job."


class ValidationError(WorkflowError):
    default_message = "Invalid input."


class RemoteFailure(WorkflowError):
    default_message = "The data store could not complete the request."
