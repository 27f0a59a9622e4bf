"""
Admin configuration for teams app.
"""

from django.contrib import admin
from .models import Team, TeamMember


class TeamMemberInline(admin.TabularInline):
    model = TeamMember
    extra = 0
    raw_id_fields = ('user',)
    readonly_fields = ('joined_at',)


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):

    list_display = ('name', 'owner', 'invite_code', 'member_count', 'created_at')
    search_fields = ('name', 'invite_code', 'owner__email')
    ordering = ('name',)
    raw_id_fields = ('owner',)
    readonly_fields = ('created_at',)
    inlines = [TeamMemberInline]

    @admin.display(description='Members')
    def member_count(self, obj):
        return obj.memberships.count()

    def get_queryset(self, request):
        return super().get_queryset(request).select_related('owner')


@admin.register(TeamMember)
class TeamMemberAdmin(admin.ModelAdmin):
    list_display = ('user', 'team', 'role', 'joined_at')
    list_filter = ('role',)
    search_fields = ('user__email', 'team__name')
    raw_id_fields = ('team', 'user')
