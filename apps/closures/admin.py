from django.contrib import admin
from .models import ClosedSlot


@admin.register(ClosedSlot)
class ClosedSlotAdmin(admin.ModelAdmin):
    list_display = ['date', 'window_label', 'status', 'reason', 'created_by', 'opened_at']
    list_filter = ['status', 'date']
    search_fields = ['reason', 'opened_reason']
    readonly_fields = ['id', 'created_by', 'opened_by', 'created_at', 'updated_at', 'opened_at']
    date_hierarchy = 'date'

    def window_label(self, obj):
        return obj.window_label
    window_label.short_description = 'Window'
