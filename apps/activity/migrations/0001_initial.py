# Generated manually: group activity log

import uuid
from django.conf import settings
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
            name='GroupActivity',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('event_type', models.CharField(choices=[('group_created', 'Group created'), ('member_added', 'Member added'), ('member_removed', 'Member removed'), ('role_changed', 'Role changed'), ('movie_night_created', 'Movie night created'), ('movie_night_updated', 'Movie night updated'), ('movie_night_locked', 'Movie night locked'), ('movie_night_unlocked', 'Movie night unlocked'), ('rsvp_reminder_sent', 'RSVP reminder sent'), ('availability_updated', 'Availability updated'), ('watchlist_added', 'Watchlist movie added'), ('watchlist_removed', 'Watchlist movie removed'), ('vote_cast', 'Vote cast')], max_length=40)),
                ('reference_id', models.UUIDField(blank=True, null=True)),
                ('metadata_json', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('actor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='group_activity', to=settings.AUTH_USER_MODEL)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='activity_events', to='groups.group')),
                ('target_user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='targeted_group_activity', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'group_activity',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['group', 'created_at'], name='group_activ_group_i_1a2b3c_idx'),
                    models.Index(fields=['group', 'event_type', 'created_at'], name='group_activ_group_i_4d5e6f_idx'),
                    models.Index(fields=['group', 'actor', 'created_at'], name='group_activ_group_i_7a8b9c_idx'),
                ],
            },
        ),
    ]
