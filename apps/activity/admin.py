from django.contrib import admin
from .models import GroupActivity


@admin.register(GroupActivity)
class GroupActivityAdmin(admin.ModelAdmin):
    """Read-only view of the audit log."""

    list_display = ['event_type', 'group', 'actor', 'target_user', 'created_at']
    list_filter = ['event_type', 'created_at']
    search_fields = ['group__name', 'actor__email', 'target_user__email']
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('group', 'actor', 'target_user')

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
