# Django
from django.core.management import BaseCommand

from parking_management.core.tasks import purge_expired_tokens


class Command(BaseCommand):
    help = 'Enqueue removal of expired blocked tokens'

    def handle(self, *args, **options):
        purge_expired_tokens.apply_async()
