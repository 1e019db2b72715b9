# staff/admin.py
from django.contrib import admin
from .models import StaffBreak, StaffVacation


@admin.register(StaffBreak)
class StaffBreakAdmin(admin.ModelAdmin):
    list_display = ("staff", "day_of_week", "date", "start_time", "end_time", "is_active")
    list_filter = ("staff", "is_active")
    search_fields = ("staff__name",)


@admin.register(StaffVacation)
class StaffVacationAdmin(admin.ModelAdmin):
    list_display = ("staff", "start_date", "end_date", "is_active")
    list_filter = ("staff", "is_active")
    search_fields = ("staff__name",)
