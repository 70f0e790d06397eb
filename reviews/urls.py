from django.urls import path

from . import views

urlpatterns = [
    # Restaurant URLs
    path('admin/restaurants/', views.RestaurantListCreateView.as_view(), name='restaurant-list-create'),
    path('admin/restaurants/<uuid:pk>/', views.RestaurantDetailView.as_view(), name='restaurant-detail'),

    # Dish URLs
    path('admin/dishes/', views.DishListCreateView.as_view(), name='dish-list-create'),
    path('admin/dishes/<uuid:pk>/', views.DishDetailView.as_view(), name='dish-detail'),

    # Images & addresses
    path('admin/upload/', views.ImageUploadView.as_view(), name='image-upload'),
    path('admin/geocode/', views.GeocodeView.as_view(), name='geocode'),
]
