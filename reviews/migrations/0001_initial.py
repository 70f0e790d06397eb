import django.core.validators
import django.db.models.deletion
import uuid
from django.db import migrations, models


def rating_validators():
    return [
        django.core.validators.MinValueValidator(1),
        django.core.validators.MaxValueValidator(5),
    ]


def in_range(field, nullable=False):
    condition = models.Q((f'{field}__gte', 1), (f'{field}__lte', 5))
    if nullable:
        condition = models.Q((f'{field}__isnull', True)) | condition
    return condition


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Restaurant',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('slug', models.CharField(max_length=120, unique=True, validators=[django.core.validators.RegexValidator('^[a-z0-9-]+$', 'Slug must be lowercase letters, numbers, and hyphens')])),
                ('category', models.CharField(choices=[('restaurant', 'Restaurant'), ('bubble_tea', 'Bubble Tea'), ('cafe', 'Cafe')], max_length=20)),
                ('cuisine_type', models.CharField(blank=True, max_length=100, null=True)),
                ('rating', models.PositiveSmallIntegerField(validators=rating_validators())),
                ('review_text', models.TextField()),
                ('address', models.TextField()),
                ('latitude', models.FloatField(validators=[django.core.validators.MinValueValidator(-90), django.core.validators.MaxValueValidator(90)])),
                ('longitude', models.FloatField(validators=[django.core.validators.MinValueValidator(-180), django.core.validators.MaxValueValidator(180)])),
                ('image_url', models.CharField(blank=True, max_length=255, null=True)),
                ('images', models.JSONField(blank=True, default=list)),
                ('ambiance_rating', models.PositiveSmallIntegerField(blank=True, null=True, validators=rating_validators())),
                ('cleanliness_rating', models.PositiveSmallIntegerField(blank=True, null=True, validators=rating_validators())),
                ('service_rating', models.PositiveSmallIntegerField(blank=True, null=True, validators=rating_validators())),
                ('value_rating', models.PositiveSmallIntegerField(blank=True, null=True, validators=rating_validators())),
                ('wait_time_rating', models.PositiveSmallIntegerField(blank=True, null=True, validators=rating_validators())),
                ('menu_review', models.TextField(blank=True, null=True)),
                ('vibe_review', models.TextField(blank=True, null=True)),
                ('location_review', models.TextField(blank=True, null=True)),
                ('tips', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'restaurants',
                'ordering': ['-created_at'],
                'constraints': [
                    models.CheckConstraint(condition=in_range('rating'), name='restaurant_rating_range'),
                    models.CheckConstraint(condition=in_range('ambiance_rating', nullable=True), name='restaurant_ambiance_rating_range'),
                    models.CheckConstraint(condition=in_range('cleanliness_rating', nullable=True), name='restaurant_cleanliness_rating_range'),
                    models.CheckConstraint(condition=in_range('service_rating', nullable=True), name='restaurant_service_rating_range'),
                    models.CheckConstraint(condition=in_range('value_rating', nullable=True), name='restaurant_value_rating_range'),
                    models.CheckConstraint(condition=in_range('wait_time_rating', nullable=True), name='restaurant_wait_time_rating_range'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Dish',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('review_text', models.TextField()),
                ('food_rating', models.PositiveSmallIntegerField(validators=rating_validators())),
                ('service_rating', models.PositiveSmallIntegerField(validators=rating_validators())),
                ('price_rating', models.PositiveSmallIntegerField(validators=rating_validators())),
                ('images', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('restaurant', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='dishes', to='reviews.restaurant')),
            ],
            options={
                'db_table': 'dishes',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'Dishes',
                'constraints': [
                    models.CheckConstraint(condition=in_range('food_rating'), name='dish_food_rating_range'),
                    models.CheckConstraint(condition=in_range('service_rating'), name='dish_service_rating_range'),
                    models.CheckConstraint(condition=in_range('price_rating'), name='dish_price_rating_range'),
                ],
            },
        ),
    ]
