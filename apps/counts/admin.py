# ==========================================
# apps/counts/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Count, Donation, CountStatus


class DonationInline(admin.TabularInline):
    """Inline admin for donations within a count."""
    model = Donation
    extra = 0
    fields = ['member', 'amount', 'donation_type', 'check_number', 'date']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        """Donations are recorded through the API so totals stay in sync."""
        return False


@admin.register(Count)
class CountAdmin(admin.ModelAdmin):
    """Admin interface for collection counts."""

    list_display = ['name', 'church', 'date', 'status_badge', 'total_amount', 'finalized_at']
    list_filter = ['status', 'church', 'date']
    search_fields = ['name', 'service', 'church__name']
    date_hierarchy = 'date'
    ordering = ['-date']
    readonly_fields = ['total_amount', 'finalized_at', 'finalized_by', 'created_at', 'updated_at']
    inlines = [DonationInline]

    def status_badge(self, obj):
        """Display count status as colored badge."""
        colors = {
            CountStatus.OPEN: ('#E5C49A', '#2C1810'),
            CountStatus.FINALIZED: ('#6B8E5E', 'white'),
        }
        bg, fg = colors.get(obj.status, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_status_display()
        )
    status_badge.short_description = 'Status'
    status_badge.admin_order_field = 'status'


@admin.register(Donation)
class DonationAdmin(admin.ModelAdmin):
    """Read-mostly admin view over donations."""

    list_display = ['id', 'count', 'member', 'amount', 'donation_type', 'date', 'notification_status']
    list_filter = ['donation_type', 'notification_status', 'church']
    search_fields = ['member__first_name', 'member__last_name', 'check_number', 'count__name']
    list_select_related = ['count', 'member']
    readonly_fields = ['created_at', 'updated_at']
