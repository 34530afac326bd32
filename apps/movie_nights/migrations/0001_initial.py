# Generated manually for the movie night planner

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('groups', '0001_initial'),
        ('movies', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='MovieNight',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('scheduled_date', models.DateTimeField()),
                ('status', models.CharField(choices=[('planned', 'Planned'), ('completed', 'Completed'), ('cancelled', 'Cancelled')], default='planned', max_length=20)),
                ('is_locked', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('chosen_movie', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='movie_nights', to='movies.movie')),
                ('created_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_movie_nights', to=settings.AUTH_USER_MODEL)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='movie_nights', to='groups.group')),
            ],
            options={
                'db_table': 'movie_nights',
                'ordering': ['-scheduled_date'],
                'indexes': [
                    models.Index(fields=['group', 'scheduled_date'], name='movie_night_group_i_6a7b8c_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MovieNightAvailability',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('is_available', models.BooleanField()),
                ('responded_at', models.DateTimeField(auto_now=True)),
                ('movie_night', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='availability', to='movie_nights.movienight')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='movie_night_availability', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'movie_night_availability',
                'ordering': ['-responded_at'],
                'unique_together': {('movie_night', 'user')},
            },
        ),
    ]
