from rest_framework import serializers

from .models import Restaurant, Dish, MIN_RATING, MAX_RATING, SLUG_PATTERN, SLUG_MESSAGE


class RatingField(serializers.IntegerField):
    """Integer rating in [1, 5]; errors name the field."""

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail_out_of_range()
        try:
            value = super().to_internal_value(data)
        except serializers.ValidationError:
            self.fail_out_of_range()
        if not MIN_RATING <= value <= MAX_RATING:
            self.fail_out_of_range()
        return value

    def fail_out_of_range(self):
        raise serializers.ValidationError(
            f"{self.field_name} must be between {MIN_RATING} and {MAX_RATING}"
        )


class ReviewModelSerializer(serializers.ModelSerializer):
    """
    Shared conventions for restaurant and dish payloads:
    - a missing, null or blank required field reads "Missing required field: <name>"
    - "" on an optional text field is stored as null
    - null for an image list clears it
    """
    optional_text_fields = []
    list_fields = ['images']

    def get_fields(self):
        fields = super().get_fields()
        for name, field in fields.items():
            if field.read_only:
                continue
            missing = f"Missing required field: {name}"
            field.error_messages['required'] = missing
            if not field.allow_null:
                field.error_messages['null'] = missing
            if not getattr(field, 'allow_blank', True):
                field.error_messages['blank'] = missing
            if isinstance(field, serializers.FloatField):
                field.error_messages['invalid'] = f"{name} must be a number"
            if isinstance(field, serializers.ChoiceField):
                field.error_messages['invalid_choice'] = f"Invalid {name}"
        return fields

    def validate(self, attrs):
        for name in self.optional_text_fields:
            if name in attrs and isinstance(attrs[name], str) and not attrs[name].strip():
                attrs[name] = None
        for name in self.list_fields:
            if name in attrs and attrs[name] is None:
                attrs[name] = []
        return attrs


def optional_text(**kwargs):
    return serializers.CharField(required=False, allow_null=True, allow_blank=True, **kwargs)


def optional_rating():
    return RatingField(required=False, allow_null=True)


def image_key_list():
    return serializers.ListField(child=serializers.CharField(max_length=255), required=False, allow_null=True)


class RestaurantSerializer(ReviewModelSerializer):
    # Declared explicitly so slug uniqueness is left to the store (409, not 400)
    slug = serializers.RegexField(
        SLUG_PATTERN, max_length=120,
        error_messages={'invalid': SLUG_MESSAGE, 'max_length': 'Slug must be at most 120 characters'},
    )
    category = serializers.ChoiceField(choices=Restaurant.CATEGORY_CHOICES)
    rating = RatingField()
    latitude = serializers.FloatField(
        min_value=-90, max_value=90,
        error_messages={'min_value': 'latitude must be between -90 and 90',
                        'max_value': 'latitude must be between -90 and 90'},
    )
    longitude = serializers.FloatField(
        min_value=-180, max_value=180,
        error_messages={'min_value': 'longitude must be between -180 and 180',
                        'max_value': 'longitude must be between -180 and 180'},
    )
    cuisine_type = optional_text(max_length=100)
    image_url = optional_text(max_length=255)
    images = image_key_list()

    ambiance_rating = optional_rating()
    cleanliness_rating = optional_rating()
    service_rating = optional_rating()
    value_rating = optional_rating()
    wait_time_rating = optional_rating()

    menu_review = optional_text()
    vibe_review = optional_text()
    location_review = optional_text()
    tips = optional_text()

    optional_text_fields = ['cuisine_type', 'image_url'] + Restaurant.REVIEW_SECTION_FIELDS

    class Meta:
        model = Restaurant
        fields = [
            'id', 'name', 'slug', 'category', 'cuisine_type', 'rating', 'review_text',
            'address', 'latitude', 'longitude', 'image_url', 'images',
            'ambiance_rating', 'cleanliness_rating', 'service_rating', 'value_rating',
            'wait_time_rating', 'menu_review', 'vibe_review', 'location_review', 'tips',
            'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def create(self, validated_data):
        from .services import create_restaurant
        return create_restaurant(validated_data)

    def update(self, instance, validated_data):
        from .services import update_restaurant
        return update_restaurant(instance, validated_data)


class RestaurantSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Restaurant
        fields = ['id', 'name', 'slug']


class DishSerializer(ReviewModelSerializer):
    restaurant_id = serializers.UUIDField(
        error_messages={'invalid': 'restaurant_id must be a valid id'},
    )
    restaurant = RestaurantSummarySerializer(read_only=True)
    food_rating = RatingField()
    service_rating = RatingField()
    price_rating = RatingField()
    images = image_key_list()

    class Meta:
        model = Dish
        fields = [
            'id', 'restaurant_id', 'restaurant', 'name', 'review_text',
            'food_rating', 'service_rating', 'price_rating', 'images', 'created_at',
        ]
        read_only_fields = ['id', 'created_at']

    def validate_restaurant_id(self, value):
        if self.instance is not None and value != self.instance.restaurant_id:
            raise serializers.ValidationError("restaurant_id cannot be changed")
        return value

    def create(self, validated_data):
        from .services import create_dish
        return create_dish(validated_data)

    def update(self, instance, validated_data):
        from .services import update_dish
        validated_data.pop('restaurant_id', None)
        return update_dish(instance, validated_data)


class DishReadSerializer(serializers.ModelSerializer):
    """Dish as shown on the public restaurant page."""

    class Meta:
        model = Dish
        fields = ['id', 'name', 'review_text', 'food_rating', 'service_rating',
                  'price_rating', 'images', 'created_at']


class RestaurantDetailSerializer(serializers.ModelSerializer):
    dishes = DishReadSerializer(many=True, read_only=True)

    class Meta:
        model = Restaurant
        fields = RestaurantSerializer.Meta.fields + ['dishes']


class ImageUploadSerializer(serializers.Serializer):
    file = serializers.FileField(
        required=False, allow_empty_file=False,
        error_messages={'invalid': 'No file provided', 'empty': 'No file provided'},
    )
