from django.contrib import admin
from .models import CancelLog, Reservation, ReservationDay


class CancelLogInline(admin.TabularInline):
    model = CancelLog
    extra = 0
    readonly_fields = ['user', 'reason', 'cancelled_date', 'cancelled_at']
    can_delete = False


@admin.register(Reservation)
class ReservationAdmin(admin.ModelAdmin):
    list_display = [
        'reservation_no', 'user', 'date', 'start_time', 'end_time', 'status', 'container_no',
    ]
    list_filter = ['status', 'date']
    search_fields = ['reservation_no', 'container_no', 'user__username', 'user__company_name']
    readonly_fields = ['id', 'reservation_no', 'created_at', 'updated_at', 'cancelled_at']
    date_hierarchy = 'date'
    inlines = [CancelLogInline]
    fieldsets = (
        ('Reservation', {'fields': ('id', 'reservation_no', 'user', 'container_no', 'packing_list_path')}),
        ('Schedule', {'fields': ('date', 'start_time', 'end_time')}),
        ('Status', {'fields': ('status', 'cancel_reason', 'cancelled_at')}),
        ('Audit', {'fields': ('created_at', 'updated_at'), 'classes': ('collapse',)}),
    )


@admin.register(CancelLog)
class CancelLogAdmin(admin.ModelAdmin):
    list_display = ['reservation', 'user', 'cancelled_date', 'cancelled_at']
    readonly_fields = ['id', 'reservation', 'user', 'reason', 'cancelled_date', 'cancelled_at']
    search_fields = ['reservation__reservation_no', 'user__username']


@admin.register(ReservationDay)
class ReservationDayAdmin(admin.ModelAdmin):
    list_display = ['date', 'last_sequence']
    readonly_fields = ['date', 'last_sequence']
