import os

from celery import Celery
from celery.schedules import crontab
from django.conf import settings

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'parking_management.settings')

app = Celery('parking_management')

# - namespace='CELERY' means all celery-related configuration keys
#   should have a `CELERY_` prefix.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django apps.
app.autodiscover_tasks()


BEAT_SCHEDULE = {
    'purge-expired-tokens': {
        'task': 'parking_management.core.tasks.purge_expired_tokens',
        'schedule': crontab(minute=0),
    },
}


app.conf.update(
    broker_url='redis://:{}@{}:{}/0'.format(
        settings.REDIS_PASSWORD, settings.REDIS_ADDR, settings.REDIS_PORT),
    broker_connection_max_retries=None,
    broker_connection_retry=True,
    timezone='UTC',
    accept_content=['json'],
    result_backend='redis://:{}@{}:{}/1'.format(
        settings.REDIS_PASSWORD, settings.REDIS_ADDR, settings.REDIS_PORT
    ),
    beat_schedule=BEAT_SCHEDULE,
)
