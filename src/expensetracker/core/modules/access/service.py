from expensetracker.core.core import Service
from expensetracker.core.modules.token.models import AuthToken, Identity


class AccessService(Service):
    async def ensure_authenticated(self, auth_token: AuthToken | None) -> Identity:
        """Verify the token and return the caller's identity. Runs before every protected operation."""
        return await self.core.services.token.verify_token(auth_token)
