from django.contrib import admin
from .models import MovieNight, MovieNightAvailability


class MovieNightAvailabilityInline(admin.TabularInline):
    model = MovieNightAvailability
    extra = 0
    fields = ['user', 'is_available', 'responded_at']
    readonly_fields = ['responded_at']


@admin.register(MovieNight)
class MovieNightAdmin(admin.ModelAdmin):
    """Admin interface for Movie Nights."""

    list_display = [
        'group',
        'scheduled_date',
        'chosen_movie',
        'status',
        'is_locked',
        'rsvp_deadline',
        'reminder_sent_at',
    ]
    list_filter = ['status', 'is_locked', 'scheduled_date']
    search_fields = ['group__name', 'chosen_movie__title']
    readonly_fields = ['reminder_sent_at', 'created_at', 'updated_at']
    inlines = [MovieNightAvailabilityInline]
    date_hierarchy = 'scheduled_date'
    ordering = ['-scheduled_date']

    fieldsets = (
        ('Schedule', {
            'fields': ('group', 'scheduled_date', 'chosen_movie', 'status', 'is_locked')
        }),
        ('RSVP', {
            'fields': ('rsvp_deadline', 'reminder_minutes_before', 'reminder_sent_at')
        }),
        ('Metadata', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    actions = ['rearm_reminders']

    @admin.action(description='Re-arm RSVP reminders')
    def rearm_reminders(self, request, queryset):
        count = queryset.update(reminder_sent_at=None)
        self.message_user(request, f"Re-armed reminders for {count} movie nights")
