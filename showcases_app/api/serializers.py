from rest_framework import serializers

from showcases_app.models import Showcase


class ShowcaseSerializer(serializers.ModelSerializer):
    description = serializers.CharField(max_length=500)
    order = serializers.IntegerField(min_value=0, required=False)
    created_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)
    updated_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = Showcase
        fields = [
            'id',
            'title',
            'description',
            'category',
            'image_url',
            'order',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id']


class ShowcaseReorderSerializer(serializers.Serializer):
    """
    The complete new order of the showcase list; each item's `order` becomes its index here.
    """
    ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=False)

    def validate_ids(self, value):
        if len(set(value)) != len(value):
            raise serializers.ValidationError('Each showcase may appear only once.')
        known = set(Showcase.objects.filter(pk__in=value).values_list('pk', flat=True))
        missing = [str(pk) for pk in value if pk not in known]
        if missing:
            raise serializers.ValidationError(f"Unknown showcases: {', '.join(missing)}")
        return value


class ShowcaseStatusSerializer(serializers.Serializer):
    is_active = serializers.BooleanField()
