from django.urls import path
from . import views

urlpatterns = [
    path('', views.signin, name="SignIn"),
    path('dashboard/', views.dashboard, name="dashboard"),
    path('logout/', views.SignOut, name='SignOut'),

    path('restaurants/new/', views.Add_Restaurant, name='Add_Restaurant'),
    path('restaurants/<uuid:pk>/edit/', views.Edit_Restaurant, name='Edit_Restaurant'),
    path('restaurants/<uuid:pk>/delete/', views.Delete_Restaurant, name='Delete_Restaurant'),

    path('restaurants/<uuid:pk>/dishes/new/', views.Add_Dish, name='Add_Dish'),
    path('dishes/<uuid:pk>/edit/', views.Edit_Dish, name='Edit_Dish'),
    path('dishes/<uuid:pk>/delete/', views.Delete_Dish, name='Delete_Dish'),
]
