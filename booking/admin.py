from django.contrib import admin
from .models import Salon, Service, Staff, Booking, SalonBreak, SalonVacation

@admin.register(Salon)
class SalonAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "booking_slot_interval")
    search_fields = ("name",)

@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "salon", "price", "duration_minutes", "active")
    list_filter = ("active", "salon")
    search_fields = ("name",)
    list_editable = ("price", "duration_minutes", "active")  # allow inline toggle

@admin.register(Staff)
class StaffAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "salon", "role", "is_active", "is_public", "accepts_bookings")
    list_filter = ("salon", "is_active", "accepts_bookings")
    search_fields = ("name", "email")
    filter_horizontal = ("services",)

@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ("id", "client_name", "staff", "date", "start_time", "end_time", "status")
    list_filter = ("status", "staff")
    search_fields = ("client_name", "client_email", "staff__name")

@admin.register(SalonBreak)
class SalonBreakAdmin(admin.ModelAdmin):
    list_display = ("salon", "day_of_week", "date", "start_time", "end_time", "is_active")
    list_filter = ("salon", "is_active")

@admin.register(SalonVacation)
class SalonVacationAdmin(admin.ModelAdmin):
    list_display = ("salon", "start_date", "end_date", "is_active")
    list_filter = ("salon", "is_active")
