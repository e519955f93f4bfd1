"""
URL configuration for the rent allocation project.

API routes:
    /api/auth/token/                      - Obtain JWT pair
    /api/auth/token/refresh/              - Refresh access token
    /api/houses/                          - Houses and membership
    /api/houses/{id}/rent-...             - Rent allocation workflow
    /api/rent-proposals/{id}...           - Single proposal operations
    /api/users/me/pending-rent-approvals  - Caller's pending decisions
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

from config.views import health_check

urlpatterns = [
    # Health check (for Render)
    path('api/health/', health_check, name='health-check'),

    # Admin
    path('admin/', admin.site.urls),

    # API Documentation
    path('api/schema/', SpectacularAPIView.as_view(), name='api-schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='api-schema'), name='api-docs'),

    # Authentication
    path('api/auth/token/', TokenObtainPairView.as_view(), name='token_obtain_pair'),
    path('api/auth/token/refresh/', TokenRefreshView.as_view(), name='token_refresh'),

    # API endpoints
    path('api/houses/', include('apps.houses.urls')),
    path('api/', include('apps.rent.urls')),
]


# Custom error handlers
handler404 = 'config.views.error_404'
handler500 = 'config.views.error_500'
