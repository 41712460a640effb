from fastapi import APIRouter, Response

from loanlink.core.config import settings
from loanlink.core.security import cookie_options, create_access_token
from loanlink.modules.auth.schemas import LogoutResponse, TokenRequest, TokenResponse

router = APIRouter(tags=["auth"])

# Claims the server controls
RESERVED_CLAIMS = ("exp", "iat", "nbf")


@router.post("/jwt", response_model=TokenResponse)
async def issue_token(identity: TokenRequest, response: Response):
    """
    Issue a one-hour session token for the submitted identity.

    The token is set as an HTTP-only cookie and also returned in the body
    for clients that send it as a bearer header.
    """
    claims = identity.model_dump(mode="json")
    for claim in RESERVED_CLAIMS:
        claims.pop(claim, None)

    token = create_access_token(claims)
    response.set_cookie(
        settings.TOKEN_COOKIE_NAME,
        token,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        **cookie_options()
    )
    return TokenResponse(token=token)


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(settings.TOKEN_COOKIE_NAME, **cookie_options())
    return LogoutResponse()
