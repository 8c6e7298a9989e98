"""
Calculation URL configuration.
"""

from django.urls import path

from apps.calculations.views import (
    CalculateEMIView,
    CalculationHistoryView,
    StatsView,
)

urlpatterns = [
    path('calculate-emi', CalculateEMIView.as_view(), name='calculate-emi'),
    path(
        'calculation-history',
        CalculationHistoryView.as_view(),
        name='calculation-history',
    ),
    path('stats', StatsView.as_view(), name='stats'),
]
