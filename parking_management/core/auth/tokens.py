import logging
from datetime import datetime, timezone as dt_timezone

from django.utils import timezone
from rest_framework_simplejwt.tokens import AccessToken

from parking_management.core.models import BlockedToken

logger = logging.getLogger(__name__)


def issue_token(user) -> str:
    return str(AccessToken.for_user(user))


def block_token(token: AccessToken) -> BlockedToken:
    expires_at = datetime.fromtimestamp(token['exp'], tz=dt_timezone.utc)
    blocked, created = BlockedToken.objects.get_or_create(
        jti=token['jti'],
        defaults={'expires_at': expires_at},
    )
    if created:
        logger.info('Blocked token %s until %s', blocked.jti, expires_at.isoformat())
    return blocked


def is_blocked(jti: str) -> bool:
    return BlockedToken.objects.filter(jti=jti).exists()


def purge_expired() -> int:
    deleted, _ = BlockedToken.objects.filter(expires_at__lte=timezone.now()).delete()
    return deleted
