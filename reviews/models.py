from django.core.validators import MaxValueValidator, MinValueValidator, RegexValidator
from django.db import models
from django.db.models import Q
import uuid

MIN_RATING = 1
MAX_RATING = 5

SLUG_PATTERN = r'^[a-z0-9-]+$'
SLUG_MESSAGE = 'Slug must be lowercase letters, numbers, and hyphens'

rating_validators = [MinValueValidator(MIN_RATING), MaxValueValidator(MAX_RATING)]


def rating_constraint(model_name, field, nullable=False):
    in_range = Q(**{f'{field}__gte': MIN_RATING, f'{field}__lte': MAX_RATING})
    if nullable:
        in_range = Q(**{f'{field}__isnull': True}) | in_range
    return models.CheckConstraint(condition=in_range, name=f'{model_name}_{field}_range')


class Restaurant(models.Model):
    """A reviewed place: restaurant, bubble tea shop or cafe."""
    CATEGORY_CHOICES = [
        ('restaurant', 'Restaurant'),
        ('bubble_tea', 'Bubble Tea'),
        ('cafe', 'Cafe'),
    ]
    SUB_RATING_FIELDS = [
        'ambiance_rating', 'cleanliness_rating', 'service_rating',
        'value_rating', 'wait_time_rating',
    ]
    REVIEW_SECTION_FIELDS = ['menu_review', 'vibe_review', 'location_review', 'tips']

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    slug = models.CharField(
        max_length=120, unique=True,
        validators=[RegexValidator(SLUG_PATTERN, SLUG_MESSAGE)],
    )
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)
    cuisine_type = models.CharField(max_length=100, null=True, blank=True)
    rating = models.PositiveSmallIntegerField(validators=rating_validators)
    review_text = models.TextField()
    address = models.TextField()
    latitude = models.FloatField(validators=[MinValueValidator(-90), MaxValueValidator(90)])
    longitude = models.FloatField(validators=[MinValueValidator(-180), MaxValueValidator(180)])

    # Blob keys in the image storage
    image_url = models.CharField(max_length=255, null=True, blank=True)
    images = models.JSONField(default=list, blank=True)

    # Category ratings
    ambiance_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=rating_validators)
    cleanliness_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=rating_validators)
    service_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=rating_validators)
    value_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=rating_validators)
    wait_time_rating = models.PositiveSmallIntegerField(null=True, blank=True, validators=rating_validators)

    # Review sections
    menu_review = models.TextField(null=True, blank=True)
    vibe_review = models.TextField(null=True, blank=True)
    location_review = models.TextField(null=True, blank=True)
    tips = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'restaurants'
        ordering = ['-created_at']
        constraints = [rating_constraint('restaurant', 'rating')] + [
            rating_constraint('restaurant', field, nullable=True)
            for field in ['ambiance_rating', 'cleanliness_rating', 'service_rating',
                          'value_rating', 'wait_time_rating']
        ]

    def __str__(self):
        return self.name

    def blob_keys(self):
        """Every stored image key this record references, main image first."""
        keys = [self.image_url] if self.image_url else []
        keys += [key for key in (self.images or []) if key]
        return list(dict.fromkeys(keys))


class Dish(models.Model):
    """A dish reviewed as part of a restaurant visit."""
    RATING_FIELDS = ['food_rating', 'service_rating', 'price_rating']

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    restaurant = models.ForeignKey(Restaurant, on_delete=models.CASCADE, related_name='dishes')
    name = models.CharField(max_length=200)
    review_text = models.TextField()
    food_rating = models.PositiveSmallIntegerField(validators=rating_validators)
    service_rating = models.PositiveSmallIntegerField(validators=rating_validators)
    price_rating = models.PositiveSmallIntegerField(validators=rating_validators)
    images = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'dishes'
        ordering = ['-created_at']
        verbose_name_plural = "Dishes"
        constraints = [
            rating_constraint('dish', field)
            for field in ['food_rating', 'service_rating', 'price_rating']
        ]

    def __str__(self):
        return f"{self.restaurant.name} - {self.name}"

    def blob_keys(self):
        return list(dict.fromkeys(key for key in (self.images or []) if key))
