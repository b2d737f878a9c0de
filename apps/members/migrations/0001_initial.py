from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('churches', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Member',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('first_name', models.CharField(max_length=100)),
                ('last_name', models.CharField(max_length=100)),
                ('email', models.EmailField(blank=True, max_length=255)),
                ('phone', models.CharField(blank=True, max_length=30)),
                ('is_visitor', models.BooleanField(default=False)),
                ('notes', models.TextField(blank=True)),
                ('external_id', models.CharField(blank=True, max_length=100)),
                ('external_system', models.CharField(blank=True, max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('church', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members', to='churches.church')),
            ],
            options={
                'db_table': 'members',
                'ordering': ['last_name', 'first_name'],
                'indexes': [models.Index(fields=['church', 'last_name', 'first_name'], name='members_church_name_idx')],
            },
        ),
    ]
