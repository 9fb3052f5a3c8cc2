from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from expensetracker.app import App
from expensetracker.core.modules.token.models import AuthToken
from expensetracker.errors import MissingTokenError

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="BearerAuth")


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_auth_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
) -> AuthToken:
    """Extract the token from the `Authorization: Bearer` header. Verification happens in App."""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError
    return AuthToken(credentials.credentials)


AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
