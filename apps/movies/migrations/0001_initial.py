# Generated manually for the movie night planner

import uuid
from django.conf import settings
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('groups', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Movie',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('tmdb_id', models.PositiveIntegerField(blank=True, null=True, unique=True)),
                ('title', models.CharField(db_index=True, max_length=255)),
                ('overview', models.TextField(blank=True)),
                ('poster_url', models.URLField(blank=True, max_length=500)),
                ('release_year', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('rating', models.DecimalField(blank=True, decimal_places=1, max_digits=3, null=True, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(10)])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'movies',
                'ordering': ['title'],
                'indexes': [
                    models.Index(fields=['rating'], name='movies_rating_8c1e2f_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GroupWatchlistEntry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('added_at', models.DateTimeField(auto_now_add=True)),
                ('added_by', models.ForeignKey(null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='watchlist_additions', to=settings.AUTH_USER_MODEL)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='watchlist', to='groups.group')),
                ('movie', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='watchlist_entries', to='movies.movie')),
            ],
            options={
                'db_table': 'group_watchlist',
                'ordering': ['-added_at'],
                'unique_together': {('group', 'movie')},
            },
        ),
        migrations.CreateModel(
            name='MovieVote',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('vote_value', models.PositiveSmallIntegerField(validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(5)])),
                ('voted_at', models.DateTimeField(auto_now=True)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='movie_votes', to='groups.group')),
                ('movie', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='votes', to='movies.movie')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='movie_votes', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'movie_votes',
                'ordering': ['-voted_at'],
                'unique_together': {('user', 'group', 'movie')},
                'indexes': [
                    models.Index(fields=['group', 'movie'], name='movie_votes_group_i_3d4e5f_idx'),
                ],
            },
        ),
    ]
