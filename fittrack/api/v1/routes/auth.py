# fittrack/api/v1/routes/auth.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.security import HTTPAuthorizationCredentials

from fittrack.api.deps import extract_token, optional_security

router = APIRouter(tags=["Authentication"])
logger = logging.getLogger(__name__)

@router.post("/jwt/logout", status_code=status.HTTP_200_OK)
async def logout(
    request: Request,
    response: Response,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
):
    """
    Log out without requiring a valid token.

    Access tokens are stateless JWTs: the client discards its copy and the
    access_token cookie is cleared when the browser sent one.
    """
    had_token = extract_token(request, credentials) is not None
    response.delete_cookie(key="access_token")
    logger.info(f"Logout requested (token present: {had_token})")
    return {"detail": "Successfully logged out"}
