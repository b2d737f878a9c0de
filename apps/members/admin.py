# ==========================================
# apps/members/admin.py
# ==========================================

from django.contrib import admin, messages
from .models import Member
from .services import delete_member, MemberHasOpenCountsError


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    """
    Admin interface for church members.

    Deletion goes through the member service so members with
    donations in open counts are never removed from here either.
    """

    list_display = ['full_name', 'church', 'email', 'phone', 'is_visitor', 'created_at']
    list_filter = ['church', 'is_visitor', 'external_system']
    search_fields = ['first_name', 'last_name', 'email', 'external_id']
    ordering = ['last_name', 'first_name']
    readonly_fields = ['created_at', 'updated_at']
    actions = ['delete_eligible_members']

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop('delete_selected', None)
        return actions

    def delete_model(self, request, obj):
        try:
            delete_member(member_id=obj.id, church_id=obj.church_id)
        except MemberHasOpenCountsError as e:
            self.message_user(
                request,
                f'{obj.full_name} was not deleted: donations in open counts ({", ".join(e.open_counts)}).',
                level=messages.ERROR,
            )

    @admin.action(description='Delete selected members (skips members in open counts)')
    def delete_eligible_members(self, request, queryset):
        deleted = 0
        skipped = 0
        for member in queryset:
            try:
                delete_member(member_id=member.id, church_id=member.church_id)
                deleted += 1
            except MemberHasOpenCountsError:
                skipped += 1

        msg = f'Deleted {deleted} member(s).'
        if skipped:
            msg += f' Skipped {skipped} member(s) with donations in open counts.'
        self.message_user(request, msg)
