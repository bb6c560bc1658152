"""FastAPI dependency: get_current_party.

Usage in any protected router:
    from src.pm_gateway.auth.dependencies import get_current_party

    @router.get("/protected")
    async def protected(party: Annotated[str, Depends(get_current_party)]):
        ...

Dependencies resolve before the handler body runs, so an unauthenticated
request never reaches PQS.
"""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from config.settings import settings
from src.pm_common.enums import AuthMode
from src.pm_common.errors import AuthenticationError
from src.pm_gateway.auth.jwt_handler import get_verification_key, resolve_party

# auto_error=False: a missing header goes through AuthenticationError so the
# 401 body matches every other auth failure.
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_party(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> str:
    """Resolve the Bearer credential to a ledger party id.

    Raises AuthenticationError (HTTP 401) if the header is missing or the
    credential does not resolve.
    """
    if credentials is None:
        raise AuthenticationError()
    token = credentials.credentials
    key = None
    if settings.AUTH_MODE == AuthMode.OAUTH2.value:
        key = await get_verification_key(token)
    return resolve_party(token, key)
