"""
Calculation serializers for the EMI Calculator service.
"""

import math

from rest_framework import serializers

from apps.core.exceptions import InvalidInputError, MissingFieldError

# Error codes that mean "the client did not send this field at all"
MISSING_CODES = frozenset({'required', 'null', 'blank'})


class PositiveNumberField(serializers.Field):
    """
    A strictly positive, finite number sent as a JSON number or numeric string.

    Blank strings count as missing rather than invalid.
    """

    default_error_messages = {
        'invalid': 'A valid number is required.',
        'not_positive': 'Ensure this value is greater than 0.',
    }

    def to_internal_value(self, data):
        if isinstance(data, bool):
            self.fail('invalid')
        if isinstance(data, str) and not data.strip():
            self.fail('required')

        try:
            value = float(data)
        except (TypeError, ValueError):
            self.fail('invalid')

        if not math.isfinite(value):
            self.fail('invalid')
        if value <= 0:
            self.fail('not_positive')
        return value

    def to_representation(self, value):
        return value


class LabelField(serializers.Field):
    """
    A free-form label. Any non-null JSON value is kept as its string form.
    """

    def to_internal_value(self, data):
        if isinstance(data, str):
            return data
        return str(data)

    def to_representation(self, value):
        return value


class CalculateEMISerializer(serializers.Serializer):
    """Serializer for the EMI calculation request."""

    REQUIRED_FIELDS = ('loanAmount', 'interestRate', 'tenureYears')

    loanAmount = PositiveNumberField(
        required=True,
        help_text="Loan principal.",
    )
    interestRate = PositiveNumberField(
        required=True,
        help_text="Annual interest rate (%).",
    )
    tenureYears = PositiveNumberField(
        required=True,
        help_text="Loan tenure in years.",
    )
    loanType = LabelField(
        required=False,
        allow_null=True,
        default=None,
        help_text="Free-form label such as 'home' or 'car'.",
    )

    def validate_tenureYears(self, value):
        """Keep whole-year tenures as integers."""
        if value.is_integer():
            return int(value)
        return value

    def validate_or_raise(self):
        """
        Validate the request and return the cleaned data.

        Presence is judged over all three amounts before any parse
        error is reported, so a request that is both incomplete and
        malformed fails as incomplete.

        Raises:
            MissingFieldError: If an amount is absent, null or blank.
            InvalidInputError: If an amount is non-numeric or not positive.
        """
        if self.is_valid():
            return self.validated_data

        codes = {
            error.code
            for field in self.REQUIRED_FIELDS
            for error in self.errors.get(field, [])
        }
        if codes & MISSING_CODES:
            raise MissingFieldError()
        raise InvalidInputError()


class CalculationResultSerializer(serializers.Serializer):
    """Serializer for the EMI calculation response."""

    emi = serializers.CharField()
    totalPayment = serializers.CharField()
    totalInterest = serializers.CharField()
    principalAmount = serializers.CharField()
    calculationId = serializers.IntegerField()


class CalculationRecordSerializer(serializers.Serializer):
    """Serializer for one entry of the calculation history."""

    id = serializers.IntegerField()
    loan_amount = serializers.FloatField()
    interest_rate = serializers.FloatField()
    tenure_years = serializers.ReadOnlyField()
    tenure_months = serializers.ReadOnlyField()
    emi = serializers.FloatField()
    total_interest = serializers.FloatField()
    total_payment = serializers.FloatField()
    loan_type = serializers.CharField(allow_null=True)
    timestamp = serializers.CharField()


class StatsSerializer(serializers.Serializer):
    """Serializer for the service statistics response."""

    totalCalculations = serializers.IntegerField()
    totalLoanAmount = serializers.FloatField()
    serverUptime = serializers.FloatField()
