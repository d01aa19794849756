from rest_framework import serializers

from settings_app.models import PlatformSetting


class PlatformSettingSerializer(serializers.ModelSerializer):
    updated_by = serializers.CharField(source='updated_by.username', read_only=True, default=None)
    updated_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = PlatformSetting
        fields = ['key', 'value', 'description', 'updated_by', 'updated_at']


class CommissionRateSerializer(serializers.Serializer):
    """
    Input of the commission rate update.

    The value is taken as text and validated by the commission module, so malformed numbers
    and out-of-range rates fail with the same error.
    """
    rate = serializers.CharField(max_length=20)
