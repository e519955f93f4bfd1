# Generated manually for rent app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('houses', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RentConfiguration',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('monthly_rent_amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('rent_due_day', models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(31)])),
                ('currency', models.CharField(default='USD', max_length=3)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='rent_configurations_set', to=settings.AUTH_USER_MODEL)),
                ('house', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_configurations', to='houses.house')),
            ],
            options={
                'db_table': 'rent_configurations',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='RentAllocationRequest',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('claimed', 'Claimed'), ('fulfilled', 'Fulfilled'), ('expired', 'Expired')], default='pending', max_length=20)),
                ('claimed_at', models.DateTimeField(blank=True, null=True)),
                ('resolved_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('claimed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='claimed_rent_requests', to=settings.AUTH_USER_MODEL)),
                ('house', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_allocation_requests', to='houses.house')),
                ('rent_configuration', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='allocation_requests', to='rent.rentconfiguration')),
            ],
            options={
                'db_table': 'rent_allocation_requests',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='RentProposal',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('status', models.CharField(choices=[('draft', 'Draft'), ('submitted', 'Submitted'), ('approved', 'Approved'), ('declined', 'Declined')], default='draft', max_length=20)),
                ('version', models.PositiveIntegerField(default=1)),
                ('decline_reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('submitted_at', models.DateTimeField(blank=True, null=True)),
                ('resolved_at', models.DateTimeField(blank=True, null=True)),
                ('allocation_request', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='proposals', to='rent.rentallocationrequest')),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_proposals_created', to=settings.AUTH_USER_MODEL)),
                ('house', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_proposals', to='houses.house')),
                ('rent_configuration', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='proposals', to='rent.rentconfiguration')),
            ],
            options={
                'db_table': 'rent_proposals',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='RentAllocation',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('approval_status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('declined', 'Declined')], default='pending', max_length=20)),
                ('responded_at', models.DateTimeField(blank=True, null=True)),
                ('decline_reason', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('proposal', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allocations', to='rent.rentproposal')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rent_allocations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'rent_allocations',
                'ordering': ['created_at'],
                'unique_together': {('proposal', 'user')},
            },
        ),

        # Indexes
        migrations.AddIndex(
            model_name='rentconfiguration',
            index=models.Index(fields=['house', 'created_at'], name='rent_config_house_idx'),
        ),
        migrations.AddIndex(
            model_name='rentallocationrequest',
            index=models.Index(fields=['house', 'status'], name='rent_req_house_status_idx'),
        ),
        migrations.AddIndex(
            model_name='rentallocationrequest',
            index=models.Index(fields=['claimed_by', 'status'], name='rent_req_claimed_status_idx'),
        ),
        migrations.AddIndex(
            model_name='rentproposal',
            index=models.Index(fields=['house', 'status'], name='rent_prop_house_status_idx'),
        ),
        migrations.AddIndex(
            model_name='rentproposal',
            index=models.Index(fields=['created_by', 'created_at'], name='rent_prop_creator_idx'),
        ),
        migrations.AddIndex(
            model_name='rentallocation',
            index=models.Index(fields=['user', 'approval_status'], name='rent_alloc_user_status_idx'),
        ),
        migrations.AddIndex(
            model_name='rentallocation',
            index=models.Index(fields=['proposal', 'approval_status'], name='rent_alloc_prop_status_idx'),
        ),

        # At most one open request and one active proposal per house
        migrations.AddConstraint(
            model_name='rentallocationrequest',
            constraint=models.UniqueConstraint(condition=models.Q(('status__in', ['pending', 'claimed'])), fields=('house',), name='unique_open_rent_request_per_house'),
        ),
        migrations.AddConstraint(
            model_name='rentproposal',
            constraint=models.UniqueConstraint(condition=models.Q(('status__in', ['draft', 'submitted'])), fields=('house',), name='unique_active_rent_proposal_per_house'),
        ),
    ]
