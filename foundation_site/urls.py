"""
URL configuration for foundation_site project.

Every API route lives under /api/, the Django admin under /django-admin/.
"""
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView

urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('api/auth/token', TokenObtainPairView.as_view(), name='token-obtain'),
    path('api/auth/token/refresh', TokenRefreshView.as_view(), name='token-refresh'),
    path('api/schema', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/', include('common.urls', namespace='common')),
    path('api/', include('content.urls', namespace='content')),
    path('api/', include('engagement.urls', namespace='engagement')),
]
