import logging

from parking_management.celery import app
from parking_management.core.auth.tokens import purge_expired

logger = logging.getLogger(__name__)


@app.task
def purge_expired_tokens() -> int:
    deleted = purge_expired()
    logger.info('Purged %d expired blocked tokens', deleted)
    return deleted
