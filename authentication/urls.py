from django.urls import path

from . import views

urlpatterns = [
    # =============== ADMIN SESSION ===============
    path('admin/login/', views.admin_login, name='admin-login'),
    path('admin/verify/', views.admin_verify, name='admin-verify'),
    path('admin/logout/', views.admin_logout, name='admin-logout'),

    # =============== SYSTEM ===============
    path('health/', views.health_check, name='health_check'),
]
