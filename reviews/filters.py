import django_filters

from .models import Dish


class DishFilter(django_filters.FilterSet):
    restaurant_id = django_filters.UUIDFilter(field_name='restaurant_id')

    class Meta:
        model = Dish
        fields = ['restaurant_id']
