from django.contrib import admin
from .models import FriendRequest, Friendship


@admin.register(FriendRequest)
class FriendRequestAdmin(admin.ModelAdmin):
    list_display = ['sender', 'receiver', 'status', 'requested_at', 'responded_at']
    list_filter = ['status']
    search_fields = ['sender__email', 'receiver__email']
    readonly_fields = ['requested_at', 'responded_at']


@admin.register(Friendship)
class FriendshipAdmin(admin.ModelAdmin):
    list_display = ['user', 'friend', 'created_at']
    search_fields = ['user__email', 'friend__email']
    readonly_fields = ['created_at']
