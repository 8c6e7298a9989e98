"""
Calculation views for the EMI Calculator service.

Views are thin — all business logic is in the service layer.
"""

from django.apps import apps
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.calculations.serializers import (
    CalculateEMISerializer,
    CalculationRecordSerializer,
    CalculationResultSerializer,
    StatsSerializer,
)
from apps.calculations.services import CalculationService
from apps.core.utils import format_amount, uptime_seconds


class HistoryStoreMixin:
    """
    Gives a view access to the calculation history.

    Pass ``store`` to ``as_view()`` to use a specific HistoryStore;
    otherwise the one built by the calculations app at startup is used.
    """

    store = None

    def get_store(self):
        if self.store is not None:
            return self.store
        return apps.get_app_config('calculations').store


class CalculateEMIView(HistoryStoreMixin, APIView):
    """
    POST /api/calculate-emi

    Compute the EMI for a loan and record it in the history.
    """

    def post(self, request):
        """Handle EMI calculation."""
        serializer = CalculateEMISerializer(data=request.data)
        validated = serializer.validate_or_raise()

        record = CalculationService.calculate(
            store=self.get_store(),
            loan_amount=validated['loanAmount'],
            interest_rate=validated['interestRate'],
            tenure_years=validated['tenureYears'],
            loan_type=validated['loanType'],
        )

        result = {
            'emi': format_amount(record.emi),
            'totalPayment': format_amount(record.total_payment),
            'totalInterest': format_amount(record.total_interest),
            'principalAmount': format_amount(record.loan_amount),
            'calculationId': record.id,
        }

        response_serializer = CalculationResultSerializer(data=result)
        response_serializer.is_valid(raise_exception=True)

        return Response(
            {'success': True, 'data': response_serializer.validated_data},
            status=status.HTTP_200_OK,
        )


class CalculationHistoryView(HistoryStoreMixin, APIView):
    """
    GET /api/calculation-history

    List the most recent calculations, newest first.
    """

    def get(self, request):
        """Handle viewing the calculation history."""
        records = CalculationService.history(self.get_store())
        serializer = CalculationRecordSerializer(records, many=True)

        return Response(
            {'success': True, 'data': serializer.data},
            status=status.HTTP_200_OK,
        )


class StatsView(HistoryStoreMixin, APIView):
    """
    GET /api/stats

    Report how many calculations are retained, their summed loan
    amount, and the server uptime.
    """

    def get(self, request):
        """Handle viewing service statistics."""
        stats = CalculationService.stats(self.get_store())

        response_data = {
            'totalCalculations': stats.count,
            'totalLoanAmount': stats.total_loan_amount,
            'serverUptime': uptime_seconds(),
        }

        response_serializer = StatsSerializer(data=response_data)
        response_serializer.is_valid(raise_exception=True)

        return Response(
            {'success': True, 'data': response_serializer.validated_data},
            status=status.HTTP_200_OK,
        )
