from django.contrib import admin
from .models import RiderSettings, Attendance, AttendanceRequest


@admin.register(RiderSettings)
class RiderSettingsAdmin(admin.ModelAdmin):
    list_display = ['rider', 'daily_petrol_cost', 'updated_at']
    search_fields = ['rider__email']
    raw_id_fields = ['rider']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ['date', 'partner', 'rider', 'amount', 'status']
    list_filter = ['status', 'date']
    search_fields = ['partner__email', 'rider__email']
    raw_id_fields = ['partner', 'rider']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'date'
    ordering = ['-date']


@admin.register(AttendanceRequest)
class AttendanceRequestAdmin(admin.ModelAdmin):
    list_display = ['date', 'rider', 'partner', 'status', 'updated_at']
    list_filter = ['status', 'date']
    search_fields = ['rider__email', 'partner__email']
    raw_id_fields = ['rider', 'partner']
    readonly_fields = ['created_at', 'updated_at']
    date_hierarchy = 'date'
