import logging

from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from rest_framework import generics, status
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.permissions import IsAdmin
from . import services
from .filters import DishFilter
from .geocoding import AddressLookup
from .serializers import RestaurantSerializer, DishSerializer, ImageUploadSerializer
from .uploads import check_declared_length, store_image

logger = logging.getLogger(__name__)

DELETE_RESPONSE = {
    'type': 'object',
    'properties': {
        'success': {'type': 'boolean'},
        'storage_errors': {'type': 'array', 'items': {'type': 'string'}},
    },
}


def deleted(storage_errors):
    body = {'success': True}
    if storage_errors:
        body['storage_errors'] = storage_errors
    return Response(body, status=status.HTTP_200_OK)


# =============== RESTAURANTS ===============

@extend_schema_view(
    get=extend_schema(summary="List Restaurants", description="All restaurants, newest first."),
    post=extend_schema(summary="Create Restaurant"),
)
class RestaurantListCreateView(generics.ListCreateAPIView):
    """
    get: List all restaurants
    post: Create a restaurant and revalidate the public pages
    """
    serializer_class = RestaurantSerializer
    permission_classes = [IsAdmin]

    def get_queryset(self):
        return services.restaurants.select()


@extend_schema_view(
    get=extend_schema(summary="Get Restaurant"),
    patch=extend_schema(summary="Update Restaurant", description="Only the fields sent are changed."),
    delete=extend_schema(
        summary="Delete Restaurant",
        description="Removes the restaurant, its dishes and their images.",
        responses={200: DELETE_RESPONSE},
    ),
)
class RestaurantDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = RestaurantSerializer
    permission_classes = [IsAdmin]
    http_method_names = ['get', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return services.restaurants.select()

    def get_object(self):
        return services.restaurants.get(self.kwargs['pk'])

    def destroy(self, request, *args, **kwargs):
        storage_errors = services.delete_restaurant(self.get_object())
        return deleted(storage_errors)


# =============== DISHES ===============

@extend_schema_view(
    get=extend_schema(summary="List Dishes", description="Dishes newest first, optionally for one restaurant."),
    post=extend_schema(summary="Create Dish"),
)
class DishListCreateView(generics.ListCreateAPIView):
    serializer_class = DishSerializer
    permission_classes = [IsAdmin]
    filter_backends = [DjangoFilterBackend]
    filterset_class = DishFilter

    def get_queryset(self):
        return services.dishes.select().select_related('restaurant')


@extend_schema_view(
    get=extend_schema(summary="Get Dish"),
    patch=extend_schema(summary="Update Dish", description="restaurant_id cannot be changed."),
    delete=extend_schema(summary="Delete Dish", responses={200: DELETE_RESPONSE}),
)
class DishDetailView(generics.RetrieveUpdateDestroyAPIView):
    serializer_class = DishSerializer
    permission_classes = [IsAdmin]
    http_method_names = ['get', 'patch', 'delete', 'head', 'options']

    def get_queryset(self):
        return services.dishes.select().select_related('restaurant')

    def get_object(self):
        return services.dishes.get(self.kwargs['pk'])

    def destroy(self, request, *args, **kwargs):
        storage_errors = services.delete_dish(self.get_object())
        return deleted(storage_errors)


# =============== IMAGES & ADDRESSES ===============

class ImageUploadView(APIView):
    permission_classes = [IsAdmin]

    @extend_schema(
        summary="Upload Image",
        description="Store one JPEG, PNG, WebP or GIF image (max 5MB) and return its storage key.",
        request={'multipart/form-data': ImageUploadSerializer},
        responses={
            200: {'type': 'object', 'properties': {'path': {'type': 'string'}}},
            400: {'description': 'Missing file, bad type or too large'},
            409: {'description': 'Storage key already taken'},
        },
    )
    def post(self, request):
        # Before touching request.data so an oversized body is never read
        check_declared_length(request.META.get('CONTENT_LENGTH'))
        key = store_image(request.FILES.get('file'))
        return Response({'path': key})


class GeocodeView(APIView):
    permission_classes = [IsAdmin]
    lookup = AddressLookup

    @extend_schema(
        summary="Look Up Address",
        description="Up to 5 matching addresses with coordinates. Queries under 3 characters return [].",
        parameters=[OpenApiParameter('q', str, description="Free-form address")],
        responses={200: {
            'type': 'array',
            'items': {
                'type': 'object',
                'properties': {
                    'display_name': {'type': 'string'},
                    'lat': {'type': 'number'},
                    'lon': {'type': 'number'},
                },
            },
        }},
    )
    def get(self, request):
        return Response(self.lookup().search(request.query_params.get('q', '')))
