# Generated manually for houses app

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='House',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('address', models.CharField(blank=True, max_length=300)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('landlord', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='managed_houses', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'houses',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='HouseMembership',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('house', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='memberships', to='houses.house')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='house_memberships', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'house_memberships',
                'ordering': ['joined_at'],
                'unique_together': {('user', 'house')},
            },
        ),
        migrations.AddIndex(
            model_name='house',
            index=models.Index(fields=['landlord', 'created_at'], name='houses_landlord_created_idx'),
        ),
        migrations.AddIndex(
            model_name='housemembership',
            index=models.Index(fields=['user', 'joined_at'], name='house_mem_user_joined_idx'),
        ),
    ]
