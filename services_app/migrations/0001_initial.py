import uuid
from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Service',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('slug', models.SlugField(max_length=120, unique=True)),
                ('name', models.CharField(max_length=255)),
                ('description', models.TextField()),
                ('category', models.CharField(choices=[('graphic_design', 'Graphic Design'), ('fivem_trailer', 'FiveM Trailer'), ('custom_clothing', 'Custom Clothing'), ('custom_cars', 'Custom Cars'), ('streaming_design', 'Streaming Design'), ('business_branding', 'Business Branding'), ('discord_design', 'Discord Design'), ('3d_design', '3D Design'), ('2d_design', '2D Design')], db_index=True, max_length=30)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.01'))])),
                ('delivery_time', models.PositiveIntegerField(help_text='Delivery time in days.', validators=[django.core.validators.MinValueValidator(1)])),
                ('icon', models.CharField(blank=True, max_length=100, null=True)),
                ('color', models.CharField(default='#0284c7', max_length=20)),
                ('image_url', models.URLField(blank=True, null=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
            ],
            options={
                'verbose_name': 'Service',
                'verbose_name_plural': 'Services',
                'ordering': ['-created_at'],
            },
        ),
    ]
