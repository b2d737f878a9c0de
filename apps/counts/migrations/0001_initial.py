from decimal import Decimal

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion
import django.utils.timezone


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('churches', '0001_initial'),
        ('members', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Count',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200)),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('status', models.CharField(choices=[('OPEN', 'Open'), ('FINALIZED', 'Finalized')], default='OPEN', max_length=20)),
                ('service', models.CharField(blank=True, max_length=100)),
                ('total_amount', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('notes', models.TextField(blank=True)),
                ('primary_attestor_name', models.CharField(blank=True, max_length=200)),
                ('secondary_attestor_name', models.CharField(blank=True, max_length=200)),
                ('finalized_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='counts', to='churches.church')),
                ('finalized_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='finalized_counts', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'counts',
                'ordering': ['-date', '-created_at'],
                'indexes': [
                    models.Index(fields=['church', 'status'], name='counts_church_status_idx'),
                    models.Index(fields=['church', 'date'], name='counts_church_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Donation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('date', models.DateTimeField(default=django.utils.timezone.now)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.01'))])),
                ('donation_type', models.CharField(choices=[('CASH', 'Cash'), ('CHECK', 'Check')], max_length=10)),
                ('check_number', models.CharField(blank=True, max_length=50)),
                ('notes', models.TextField(blank=True)),
                ('notification_status', models.CharField(choices=[('PENDING', 'Pending'), ('SENT', 'Sent'), ('FAILED', 'Failed'), ('NOT_REQUIRED', 'Not required')], default='PENDING', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='donations', to='churches.church')),
                ('count', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='donations', to='counts.count')),
                ('member', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='donations', to='members.member')),
            ],
            options={
                'db_table': 'donations',
                'ordering': ['date', 'created_at'],
                'indexes': [
                    models.Index(fields=['member', 'count'], name='donations_member_count_idx'),
                    models.Index(fields=['church', 'date'], name='donations_church_date_idx'),
                ],
            },
        ),
    ]
