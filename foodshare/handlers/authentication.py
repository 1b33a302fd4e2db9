"""Identity supplied by the upstream gateway.

Credential checks happen before requests reach this app. The gateway
forwards the verified user ID in a header, which is trusted as-is.
"""

from django.conf import settings
from rest_framework.authentication import BaseAuthentication
from rest_framework.request import Request


class GatewayUser:
    """Authenticated caller known only by an opaque ID."""

    is_authenticated = True
    is_anonymous = False

    def __init__(self, user_id: str) -> None:
        self.id = user_id
        self.pk = user_id

    def __str__(self) -> str:
        return self.id


class GatewayHeaderAuthentication(BaseAuthentication):
    """Authenticate from the identity header, or leave the request anonymous."""

    def authenticate(self, request: Request) -> tuple[GatewayUser, None] | None:
        user_id = request.headers.get(settings.FOODSHARE_IDENTITY_HEADER, "").strip()
        if not user_id:
            return None
        return GatewayUser(user_id), None

    def authenticate_header(self, request: Request) -> str:
        # Non-empty so DRF answers 401 rather than 403.
        return "Gateway"


def caller_id(request: Request) -> str | None:
    user = request.user
    if isinstance(user, GatewayUser):
        return user.id
    return None
