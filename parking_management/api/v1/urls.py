from django.urls import path
from rest_framework.routers import DefaultRouter

from parking_management.api.v1 import views

router = DefaultRouter(trailing_slash=False)
router.register('parks', views.ParkViewSet, basename='park')
router.register('spots', views.SpotViewSet, basename='spot')
router.register('users/owner/requests', views.OwnerParkingRequestViewSet, basename='owner_request')
router.register('users/requests', views.ParkingRequestViewSet, basename='request')


urlpatterns = [
    path('auth/register', views.RegisterView.as_view(), name='auth_register'),
    path('auth/login', views.LoginView.as_view(), name='auth_login'),
    path('auth/me', views.MeView.as_view(), name='auth_me'),
    path('auth/logout', views.LogoutView.as_view(), name='auth_logout'),
    path('auth/reset-password', views.ResetPasswordView.as_view(), name='auth_reset_password'),
] + router.urls
