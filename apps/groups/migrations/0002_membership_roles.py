# Generated manually: explicit membership roles

from django.db import migrations, models


def backfill_owner_roles(apps, schema_editor):
    """Give each group's creator the owner role."""
    Group = apps.get_model('groups', 'Group')
    GroupMembership = apps.get_model('groups', 'GroupMembership')

    for group_id, creator_id in Group.objects.exclude(created_by=None).values_list('id', 'created_by_id'):
        GroupMembership.objects.filter(group_id=group_id, user_id=creator_id).update(role='owner')


class Migration(migrations.Migration):

    dependencies = [
        ('groups', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='groupmembership',
            name='role',
            field=models.CharField(choices=[('member', 'Member'), ('moderator', 'Moderator'), ('owner', 'Owner')], default='member', max_length=20),
        ),
        migrations.AddIndex(
            model_name='groupmembership',
            index=models.Index(fields=['group', 'role'], name='group_membe_group_i_7b2c1d_idx'),
        ),
        migrations.RunPython(backfill_owner_roles, migrations.RunPython.noop),
    ]
