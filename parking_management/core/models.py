from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models


class Role(models.TextChoices):
    USER = 'USER'
    OWNER = 'OWNER'
    ADMIN = 'ADMIN'


class UserManager(BaseUserManager):

    def create_user(self, email: str, password: str, **extra_fields) -> 'User':
        user = self.model(email=self.normalize_email(email), **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user


class User(AbstractBaseUser):

    email = models.EmailField(unique=True)
    firstname = models.CharField(max_length=100, blank=True)
    lastname = models.CharField(max_length=100, blank=True)
    role = models.CharField(max_length=10, choices=Role.choices, default=Role.USER)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'

    @property
    def name(self) -> str:
        return f'{self.firstname} {self.lastname}'.strip()

    def __str__(self):
        return self.email


class ParkStatus(models.TextChoices):
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'


class Park(models.Model):

    owner = models.ForeignKey(
        'User',
        on_delete=models.CASCADE,
        related_name='parks',
    )
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    image = models.ImageField(upload_to='parks/', blank=True)
    total_spots = models.PositiveIntegerField()
    hourly_rate = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(max_length=10, choices=ParkStatus.choices, default=ParkStatus.PENDING)
    spots_generated = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.name


class Spot(models.Model):

    park = models.ForeignKey(
        'Park',
        on_delete=models.CASCADE,
        related_name='spots',
    )
    spot_number = models.CharField(max_length=10)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['park', 'spot_number']
        unique_together = ('park', 'spot_number')

    def __str__(self):
        return f'{self.park.name} - {self.spot_number}'


class RequestStatus(models.TextChoices):
    PENDING = 'PENDING'
    APPROVED = 'APPROVED'
    REJECTED = 'REJECTED'
    CANCELLED = 'CANCELLED'
    COMPLETED = 'COMPLETED'


class ParkingRequest(models.Model):

    user = models.ForeignKey(
        'User',
        on_delete=models.CASCADE,
        related_name='parking_requests',
    )
    park = models.ForeignKey(
        'Park',
        on_delete=models.CASCADE,
        related_name='parking_requests',
    )
    spot = models.ForeignKey(
        'Spot',
        on_delete=models.CASCADE,
        related_name='parking_requests',
    )
    start_time = models.DateTimeField()
    # Null while the session is ongoing.
    end_time = models.DateTimeField(null=True, blank=True)
    status = models.CharField(max_length=10, choices=RequestStatus.choices, default=RequestStatus.PENDING)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    plate_number = models.CharField(max_length=20, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['spot', 'status'], name='request_spot_status_idx'),
        ]

    @property
    def is_ongoing(self) -> bool:
        return self.end_time is None


class BlockedToken(models.Model):

    jti = models.CharField(max_length=255, unique=True)
    expires_at = models.DateTimeField()
    created_at = models.DateTimeField(auto_now_add=True)
