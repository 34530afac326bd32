from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin interface for User model.

    Soft-deleted users stay listed (filter on "deleted") so their history
    remains inspectable. The lockout can be cleared with a bulk action.
    """

    list_display = [
        'email',
        'name',
        'status_badge',
        'is_staff',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'is_active',
        'is_staff',
        'group_notifications',
        'vote_notifications',
        'created_at',
    ]

    search_fields = ['email', 'name']
    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'name', 'password')
        }),
        ('Notifications', {
            'fields': ('email_notifications', 'group_notifications', 'vote_notifications'),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Security', {
            'fields': ('failed_login_attempts', 'locked_until'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login', 'deleted_at'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login', 'deleted_at']
    filter_horizontal = ['groups', 'user_permissions']

    def status_badge(self, obj):
        """Display deleted/locked/active status as colored badge."""
        if obj.is_deleted:
            label, color = 'Deleted', '#B85C5C'
        elif obj.is_locked():
            label, color = 'Locked', '#E5A03A'
        elif obj.is_active:
            label, color = 'Active', '#6B8E5E'
        else:
            label, color = 'Inactive', '#999'
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            color, label,
        )
    status_badge.short_description = 'Status'

    actions = ['unlock_users']

    @admin.action(description='Clear login lockout')
    def unlock_users(self, request, queryset):
        count = queryset.update(locked_until=None, failed_login_attempts=0)
        self.message_user(request, f'Unlocked {count} user(s).')
