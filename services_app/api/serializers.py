from decimal import Decimal

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from services_app.models import Service


class ServiceSerializer(serializers.ModelSerializer):
    """
    Serializes a Service for the catalogue and for administrator create/update requests.

    The slug must be unique across all services, including soft-deleted ones, because the
    database constraint still covers those rows.
    """
    slug = serializers.SlugField(
        max_length=120,
        validators=[UniqueValidator(
            queryset=Service.all_objects.all(),
            message='A service with this slug already exists.'
        )]
    )
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.01'))
    delivery_time = serializers.IntegerField(min_value=1)
    created_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)
    updated_at = serializers.DateTimeField(format="%Y-%m-%dT%H:%M:%SZ", read_only=True)

    class Meta:
        model = Service
        fields = [
            'id',
            'slug',
            'name',
            'description',
            'category',
            'price',
            'delivery_time',
            'icon',
            'color',
            'image_url',
            'is_active',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id']


class ServiceSummarySerializer(serializers.ModelSerializer):
    """A compact service representation embedded in order listings."""

    class Meta:
        model = Service
        fields = ['id', 'slug', 'name', 'category', 'price']
