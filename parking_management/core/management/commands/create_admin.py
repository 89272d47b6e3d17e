# Django
from django.core.management import BaseCommand, CommandError

from parking_management.core.models import Role, User


class Command(BaseCommand):
    help = 'Create an ADMIN account, or promote an existing account to ADMIN'

    def add_arguments(self, parser):
        parser.add_argument('email')
        parser.add_argument('password')
        parser.add_argument('--firstname', default='')
        parser.add_argument('--lastname', default='')

    def handle(self, *args, **options):
        user = User.objects.filter(email__iexact=options['email']).first()
        if user is not None:
            if user.role == Role.ADMIN:
                raise CommandError(f'{user.email} is already an admin')
            user.role = Role.ADMIN
            user.save(update_fields=['role', 'updated_at'])
            self.stdout.write(self.style.SUCCESS(f'Promoted {user.email} to admin'))
            return

        user = User.objects.create_user(
            email=options['email'],
            password=options['password'],
            firstname=options['firstname'],
            lastname=options['lastname'],
            role=Role.ADMIN,
        )
        self.stdout.write(self.style.SUCCESS(f'Created admin {user.email}'))
