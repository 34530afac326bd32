# Generated manually: RSVP deadline and reminder bookkeeping

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('movie_nights', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='movienight',
            name='rsvp_deadline',
            field=models.DateTimeField(blank=True, null=True),
        ),
        migrations.AddField(
            model_name='movienight',
            name='reminder_minutes_before',
            field=models.PositiveIntegerField(blank=True, null=True),
        ),
        migrations.AddField(
            model_name='movienight',
            name='reminder_sent_at',
            field=models.DateTimeField(blank=True, null=True),
        ),
        migrations.AddIndex(
            model_name='movienight',
            index=models.Index(fields=['status', 'reminder_sent_at'], name='movie_night_status_9d0e1f_idx'),
        ),
    ]
