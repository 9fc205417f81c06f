from fastapi import HTTPException
from pydantic import BaseModel
from typing import Optional


class ProblemDetail(BaseModel):
    """RFC 7807 compliant error response."""

    type: str = "about:blank"
    title: str
    detail: Optional[str] = None
    status: int
    instance: Optional[str] = None
    code: str


class DomainException(Exception):
    """Base class for domain-specific exceptions."""

    def __init__(
        self,
        status_code: int,
        title: str,
        *,
        code: str,
        detail: str | None = None,
        type_: str = "about:blank",
    ) -> None:
        self.status_code = status_code
        self.title = title
        self.detail = detail
        self.type = type_
        self.code = code


class SessionNotFound(DomainException):
    def __init__(self, session_id: str) -> None:
        super().__init__(
            status_code=404,
            title="Session not found",
            detail=f"entry session '{session_id}' not found or expired",
            code="session_not_found",
        )


class GameIncomplete(DomainException):
    def __init__(self, detail: str = "game is not complete") -> None:
        super().__init__(
            status_code=409,
            title="Game incomplete",
            detail=detail,
            code="game_incomplete",
        )


class InvalidFrame(DomainException):
    def __init__(self, detail: str) -> None:
        super().__init__(
            status_code=422,
            title="Invalid frame",
            detail=detail,
            code="invalid_frame",
        )


def http_problem(
    status_code: int,
    detail: str,
    code: str,
    *,
    headers: Optional[dict[str, str]] = None,
) -> HTTPException:
    """Create an HTTPException with an attached problem code."""

    exc = HTTPException(status_code=status_code, detail=detail, headers=headers)
    setattr(exc, "code", code)
    return exc
