from django.shortcuts import render, get_object_or_404
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from rest_framework import generics, permissions
from rest_framework.exceptions import NotFound

from reviews.models import Restaurant
from reviews.serializers import RestaurantSerializer, RestaurantDetailSerializer
from .filters import RestaurantFilter, cuisine_types
from .revalidation import cached_public_page

CATEGORY_OPTIONS = [('all', 'All'), ('restaurant', 'Restaurants'), ('bubble_tea', 'Bubble Tea'), ('cafe', 'Cafes')]
RATING_OPTIONS = [(0, 'Any Rating'), (3, '3+ ★'), (4, '4+ ★'), (5, '5 ★')]

# Toronto
MAP_DEFAULT_CENTER = [43.65, -79.38]
MAP_DEFAULT_ZOOM = 12


# =============== PAGES ===============

@cached_public_page
def home(request):
    restaurant_filter = RestaurantFilter(request.GET, queryset=Restaurant.objects.order_by('-created_at'))
    restaurants = list(restaurant_filter.qs)
    context = {
        'restaurants': restaurants,
        'count': len(restaurants),
        'cuisine_types': cuisine_types(),
        'category_options': CATEGORY_OPTIONS,
        'rating_options': RATING_OPTIONS,
        'selected': {
            'categories': [c for c in request.GET.get('categories', '').split(',') if c],
            'cuisine': request.GET.get('cuisine', ''),
            'rating': request.GET.get('rating', ''),
        },
        'has_filters': any(request.GET.get(k) for k in ('categories', 'cuisine', 'rating')),
    }
    return render(request, 'gallery/home.html', context)


def map_markers(restaurants):
    return [
        {
            'id': str(r.id),
            'name': r.name,
            'slug': r.slug,
            'category': r.category,
            'rating': r.rating,
            'latitude': r.latitude,
            'longitude': r.longitude,
        }
        for r in restaurants
    ]


@cached_public_page
def map_view(request):
    markers = map_markers(Restaurant.objects.order_by('-created_at'))
    return render(request, 'gallery/map.html', {
        'markers': markers,
        'count': len(markers),
        'center': MAP_DEFAULT_CENTER,
        'zoom': MAP_DEFAULT_ZOOM,
    })


@cached_public_page
def restaurant_detail(request, slug):
    restaurant = get_object_or_404(Restaurant, slug=slug)
    dishes = restaurant.dishes.order_by('-created_at')
    sub_ratings = [
        (field.replace('_rating', '').replace('_', ' ').title(), getattr(restaurant, field))
        for field in Restaurant.SUB_RATING_FIELDS
        if getattr(restaurant, field) is not None
    ]
    sections = [
        (field.replace('_review', '').replace('_', ' ').title(), getattr(restaurant, field))
        for field in Restaurant.REVIEW_SECTION_FIELDS
        if getattr(restaurant, field)
    ]
    return render(request, 'gallery/restaurant_detail.html', {
        'restaurant': restaurant,
        'dishes': dishes,
        'sub_ratings': sub_ratings,
        'sections': sections,
    })


# =============== PUBLIC API ===============

@extend_schema_view(get=extend_schema(
    summary="Browse Restaurants",
    description="Public listing, newest first.",
    parameters=[
        OpenApiParameter('categories', str, description="Comma-separated categories"),
        OpenApiParameter('cuisine', str, description="Cuisine type (case-insensitive)"),
        OpenApiParameter('rating', int, description="Minimum rating, 1 to 5"),
    ],
))
class PublicRestaurantListView(generics.ListAPIView):
    serializer_class = RestaurantSerializer
    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    filterset_class = RestaurantFilter

    def get_queryset(self):
        return Restaurant.objects.order_by('-created_at')


@extend_schema_view(get=extend_schema(summary="Restaurant Review", description="A restaurant with its dishes."))
class PublicRestaurantDetailView(generics.RetrieveAPIView):
    serializer_class = RestaurantDetailSerializer
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def get_object(self):
        restaurant = Restaurant.objects.filter(slug=self.kwargs['slug']).first()
        if restaurant is None:
            raise NotFound("Restaurant not found")
        return restaurant
