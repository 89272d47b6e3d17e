from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.settings import api_settings

from parking_management.core.auth.tokens import is_blocked
from parking_management.core.exceptions import AuthenticationFailed


class BlockedTokenAuthentication(JWTAuthentication):
    """JWT authentication that refuses tokens revoked by logout."""

    def get_validated_token(self, raw_token):
        token = super().get_validated_token(raw_token)
        if is_blocked(token[api_settings.JTI_CLAIM]):
            raise AuthenticationFailed('Token invalidated. Please log in again.')
        return token
