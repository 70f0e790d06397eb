import django_filters

from reviews.models import Restaurant, MIN_RATING, MAX_RATING


class RestaurantFilter(django_filters.FilterSet):
    """
    Public listing filters:
    - categories: comma-separated categories, any of which matches
    - cuisine: cuisine type, case-insensitive exact match
    - rating: minimum rating, ignored unless it is a whole number from 1 to 5
    """
    categories = django_filters.CharFilter(method='filter_categories')
    cuisine = django_filters.CharFilter(field_name='cuisine_type', lookup_expr='iexact')
    rating = django_filters.CharFilter(method='filter_rating')

    class Meta:
        model = Restaurant
        fields = ['categories', 'cuisine', 'rating']

    def filter_categories(self, queryset, name, value):
        wanted = [c.strip() for c in value.split(',') if c.strip()]
        if not wanted:
            return queryset
        return queryset.filter(category__in=wanted)

    def filter_rating(self, queryset, name, value):
        try:
            minimum = int(value)
        except (TypeError, ValueError):
            return queryset
        if MIN_RATING <= minimum <= MAX_RATING:
            return queryset.filter(rating__gte=minimum)
        return queryset


def cuisine_types():
    """Distinct non-empty cuisine types, for the filter bar."""
    values = (
        Restaurant.objects.exclude(cuisine_type__isnull=True)
        .exclude(cuisine_type='')
        .order_by('cuisine_type')
        .values_list('cuisine_type', flat=True)
        .distinct()
    )
    return list(values)
