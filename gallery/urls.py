from django.urls import path

from . import views
from .revalidation import cached_public_page

urlpatterns = [
    # Pages
    path('', views.home, name='home'),
    path('map/', views.map_view, name='map'),
    path('restaurant/<slug:slug>/', views.restaurant_detail, name='restaurant_detail'),

    # Public JSON
    path('api/restaurants/', cached_public_page(views.PublicRestaurantListView.as_view()),
         name='public-restaurant-list'),
    path('api/restaurants/<slug:slug>/', cached_public_page(views.PublicRestaurantDetailView.as_view()),
         name='public-restaurant-detail'),
]
