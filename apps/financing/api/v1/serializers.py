"""
Serializers for the financing bounded context.

Input serializers only coerce the payload into raw strings; the business
rules live in apps.financing.domain.validation so the API reports the same
error kinds as the form controller.
"""

from rest_framework import serializers


def raw_text(**kwargs):
    return serializers.CharField(required=False, allow_blank=True, trim_whitespace=False, **kwargs)


class FinancingRequestInputSerializer(serializers.Serializer):
    name = raw_text(default="")
    origin_country = raw_text(default="")
    project_code = raw_text(default="")
    description = raw_text(default="")
    amount = raw_text(allow_null=True, default=None)
    currency = raw_text(default="")
    start_date = raw_text(allow_null=True, default=None)
    end_date = raw_text(allow_null=True, default=None)

    def validate_origin_country(self, value: str) -> str:
        return value.strip().upper()

    def validate_currency(self, value: str) -> str:
        return value.strip().upper()


class FieldErrorSerializer(serializers.Serializer):
    code = serializers.CharField()
    message = serializers.CharField()


class FormStatusSerializer(serializers.Serializer):
    is_valid = serializers.BooleanField()
    errors = serializers.DictField(child=FieldErrorSerializer())
    is_opec = serializers.BooleanField()
    currency_is_user_editable = serializers.BooleanField()
    min_start_date = serializers.DateField()
    description_remaining = serializers.IntegerField()
    status_message = serializers.CharField()
    values = serializers.DictField()


class SubmissionFailureSerializer(serializers.Serializer):
    error = serializers.CharField()
    message = serializers.CharField()
    values = serializers.DictField()


class SubmissionSuccessSerializer(serializers.Serializer):
    message = serializers.CharField()


class CountrySerializer(serializers.Serializer):
    code = serializers.CharField(max_length=2)
    name = serializers.CharField()


class CurrencySerializer(serializers.Serializer):
    code = serializers.CharField(max_length=3)
    name = serializers.CharField()


class ReferenceDataSerializer(serializers.Serializer):
    countries = CountrySerializer(many=True)
    currencies = CurrencySerializer(many=True)
    warnings = serializers.ListField(child=serializers.CharField())
