"""Resolution of assignee tokens."""

from ..gateway import MetadataGateway
from .fields import names_equal

ME = "me"
UNASSIGNED = "unassigned"


class AssigneeResolver:
    """
    Maps "me", "unassigned" or a raw account identifier to an assignee id.

    ``""`` means "no assignee" and is distinct from ``None``, which means the
    current user could not be identified. Other tokens are passed through
    without checking that the account exists.
    """

    def __init__(self, gateway: MetadataGateway) -> None:
        self.gateway = gateway

    async def resolve(self, token: str) -> str | None:
        if names_equal(token, ME):
            user = await self.gateway.get_current_user()
            return user.identifier
        if names_equal(token, UNASSIGNED):
            return ""
        return token
