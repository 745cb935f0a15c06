# flyer_backend/core/errors.py
from fastapi import HTTPException, status


class ValidationError(HTTPException):
    """
    Request rejected by a business rule before anything was written.
    """

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    """
    Referenced entity does not exist.

    Services report a missing project as None / False; routers turn that
    outcome into this error.
    """

    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class PersistenceFailure(HTTPException):
    """
    Storage failed inside a unit of work. The session has been rolled back.
    """

    def __init__(self, detail: str = "Could not persist changes"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )
