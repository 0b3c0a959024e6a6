from django.db import IntegrityError, models, transaction
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.core.validators import MaxValueValidator, MinValueValidator
from django.utils import timezone
import uuid


class DuplicateEmail(Exception):
    """Raised by the credential store when an email is already registered"""


def normalize_email(email):
    """ Emails are stored and looked up trimmed and lower-cased """
    return (email or "").strip().lower()


class UserManager(BaseUserManager):
    """ Credential store: users are identified by email only """
    use_in_migrations = True

    def create_user(self, email, password=None, **extra_fields):
        """ Create a user with a hashed password
            The unique constraint on email is the only duplicate check, so a
            concurrent signup with the same email can't create a second row
        """
        email = normalize_email(email)
        if not email:
            raise ValueError("An email address is required")

        user = self.model(email=email, **extra_fields)
        user.set_password(password)  # salted one-way hash
        try:
            with transaction.atomic(using=self._db):
                user.save(using=self._db)
        except IntegrityError as exc:
            raise DuplicateEmail(email) from exc
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(email, password, **extra_fields)

    def find_by_email(self, email):
        """ Return the user registered with this email, or None """
        return self.filter(email=normalize_email(email)).first()


class User(AbstractUser):
    """User model extending Django's AbstractUser, logging in with an email"""
    user_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    username = None
    email = models.EmailField(unique=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = UserManager()

    def __str__(self):
        return self.email


class MovieQuerySet(models.QuerySet):
    """ Movie record store
        Every identity-scoped operation puts the id and the owner in the same
        WHERE clause, so a record owned by someone else is simply not matched
    """

    def owned_by(self, owner):
        return self.filter(owner=owner)

    def update_owned(self, movie_id, owner, **changes):
        """ Partial update of one owned movie, returns the fresh row or None """
        # update() skips auto_now fields
        changes['updated_at'] = timezone.now()
        updated = self.filter(movie_id=movie_id, owner=owner).update(**changes)
        if not updated:
            return None
        return self.get(movie_id=movie_id)

    def delete_owned(self, movie_id, owner):
        """ Delete one owned movie, True if a row was removed """
        deleted, _ = self.filter(movie_id=movie_id, owner=owner).delete()
        return deleted > 0


class Movie(models.Model):
    """Model for a movie the owner watched"""
    movie_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    owner = models.ForeignKey(User, on_delete=models.CASCADE, related_name='movies', editable=False)
    title = models.CharField(max_length=255)
    watched_date = models.DateField()
    rating = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(10)],
        help_text="Rating from 1 to 10"
    )
    genres = models.JSONField(default=list, help_text="Ordered list of genre names")
    tags = models.JSONField(default=list, blank=True)
    director = models.CharField(max_length=255)
    actors = models.JSONField(default=list, help_text="Ordered list of main cast members")
    notes = models.TextField(blank=True)
    poster_url = models.URLField(max_length=500, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MovieQuerySet.as_manager()

    class Meta:
        ordering = ['-watched_date', '-created_at']
        constraints = [
            models.CheckConstraint(
                condition=models.Q(rating__gte=1, rating__lte=10),
                name='movie_rating_between_1_and_10',
            ),
        ]

    def __str__(self):
        return f"{self.title} ({self.watched_date})"
