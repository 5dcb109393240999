"""URL configuration for the AgroRent project.

Routes the Django admin, the API schema and the application-level routers
of each app.
"""
from django.contrib import admin  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    # Application URLs
    path('api/auth/', include(('apps.users.auth_urls', 'auth'), namespace='auth')),
    path('api/equipment/', include('apps.equipment.urls')),
    path('api/bookings/', include('apps.bookings.urls')),
]
