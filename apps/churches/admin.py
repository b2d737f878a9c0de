# ==========================================
# apps/churches/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Church, ChurchStatus


@admin.register(Church)
class ChurchAdmin(admin.ModelAdmin):
    """Admin interface for churches (tenants)."""

    list_display = ['name', 'id', 'status_badge', 'contact_email', 'city', 'created_at']
    list_filter = ['status', 'created_at']
    search_fields = ['id', 'name', 'contact_email']
    ordering = ['name']
    readonly_fields = ['created_at', 'updated_at']

    def status_badge(self, obj):
        """Display church status as colored badge."""
        colors = {
            ChurchStatus.ACTIVE: ('#6B8E5E', 'white'),
            ChurchStatus.SUSPENDED: ('#E5C49A', '#2C1810'),
            ChurchStatus.DELETED: ('#B85C5C', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'
