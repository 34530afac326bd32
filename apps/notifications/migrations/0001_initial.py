# Generated manually for the movie night planner

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
            name='Notification',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('group_invite', 'Added to group'), ('movie_night', 'Movie night'), ('rsvp_reminder', 'RSVP reminder'), ('vote_reminder', 'Vote reminder'), ('friend_request', 'Friend request'), ('friend_accepted', 'Friend request accepted'), ('watchlist_add', 'Watchlist addition')], max_length=30)),
                ('title', models.CharField(max_length=200)),
                ('message', models.TextField()),
                ('reference_id', models.UUIDField(blank=True, null=True)),
                ('is_read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='notifications', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'notifications',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user', 'is_read', 'created_at'], name='notificatio_user_id_2b3c4d_idx'),
                    models.Index(fields=['user', 'type', 'reference_id', 'created_at'], name='notificatio_user_id_5e6f7a_idx'),
                ],
            },
        ),
    ]
