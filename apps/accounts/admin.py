from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    list_display = ['username', 'display_name', 'role', 'company_name', 'phone', 'is_active']
    list_filter = ['role', 'is_active']
    search_fields = ['username', 'display_name', 'company_name', 'phone']
    fieldsets = DjangoUserAdmin.fieldsets + (
        ('Warehouse', {'fields': ('role', 'display_name', 'company_name', 'phone')}),
    )
    add_fieldsets = DjangoUserAdmin.add_fieldsets + (
        ('Warehouse', {'fields': ('role', 'display_name', 'company_name', 'phone')}),
    )
