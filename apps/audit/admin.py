from django.contrib import admin

from .models import OperationLog


@admin.register(OperationLog)
class OperationLogAdmin(admin.ModelAdmin):
    list_display = ['operation_type', 'user', 'created_at']
    list_filter = ['operation_type']
    readonly_fields = ['id', 'user', 'operation_type', 'detail', 'created_at']
    search_fields = ['user__username', 'operation_type']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
