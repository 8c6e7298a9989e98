"""
URL configuration for the EMI Calculator service.
"""

from django.urls import include, path

from apps.core.views import health_check, index

urlpatterns = [
    path('', index, name='index'),
    path('health', health_check, name='health-check'),
    path('api/', include('apps.calculations.urls')),
]

handler404 = 'apps.core.views.not_found'
