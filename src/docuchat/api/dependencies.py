"""FastAPI dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from docuchat.session import Session


async def get_session(request: Request) -> Session:
    """Get the live session from application state."""
    session = getattr(request.app.state, "session", None)
    if session is None:
        raise HTTPException(status_code=503, detail="Service is not ready")
    return session


# Type aliases for dependency injection
SessionDep = Annotated[Session, Depends(get_session)]
