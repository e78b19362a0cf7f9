"""
Django admin registrations for the portal models.

Superusers can inspect catalog data, bookings and verifications through
``/admin/``.  Payment and audit rows are read-mostly; edit them only to
correct data by hand.
"""

from django.contrib import admin

from .models import (
    User,
    Hospital,
    Doctor,
    DoctorReview,
    CommunicationRequest,
    Treatment,
    Consultation,
    ChatMessage,
    MedicalRecord,
    PassportVerification,
    Stay,
    TourPackage,
    Booking,
    FlightBooking,
    AnalyticsEntry,
    AuditEvent,
)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('username', 'email', 'role', 'country', 'is_staff', 'is_superuser')
    list_filter = ('role', 'is_staff')
    search_fields = ('username', 'email', 'first_name', 'last_name')


@admin.register(Hospital)
class HospitalAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'city', 'rating', 'emergency_available')
    list_filter = ('city', 'emergency_available')
    search_fields = ('name', 'address', 'city')


@admin.register(Doctor)
class DoctorAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'specialization', 'hospital', 'rating', 'consultation_fee', 'verified')
    list_filter = ('verified', 'specialization')
    search_fields = ('name', 'specialization', 'hospital_name')


@admin.register(DoctorReview)
class DoctorReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'doctor', 'user', 'rating', 'created_at')
    list_filter = ('rating',)


@admin.register(CommunicationRequest)
class CommunicationRequestAdmin(admin.ModelAdmin):
    list_display = ('id', 'doctor', 'user', 'status', 'created_at')
    list_filter = ('status',)


@admin.register(Treatment)
class TreatmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'category', 'city', 'price_usd', 'featured')
    list_filter = ('featured', 'category', 'city')
    search_fields = ('title', 'description')


@admin.register(Consultation)
class ConsultationAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'doctor', 'status', 'consultation_date', 'created_at')
    list_filter = ('status',)
    search_fields = ('user__username', 'doctor__name', 'medical_condition')


@admin.register(ChatMessage)
class ChatMessageAdmin(admin.ModelAdmin):
    list_display = ('id', 'consultation', 'sender', 'sender_type', 'message_type', 'created_at', 'read_at')
    list_filter = ('sender_type', 'message_type')


@admin.register(MedicalRecord)
class MedicalRecordAdmin(admin.ModelAdmin):
    list_display = ('id', 'uploaded_by', 'file_name', 'record_type', 'file_size', 'created_at')
    search_fields = ('file_name', 'uploaded_by__username')


@admin.register(PassportVerification)
class PassportVerificationAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'passport_country', 'passport_expiry', 'verification_status', 'reviewed_at')
    list_filter = ('verification_status',)
    search_fields = ('user__username', 'passport_number')


@admin.register(Stay)
class StayAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'city', 'price_per_night', 'rating', 'hospital_proximity_km')
    list_filter = ('city',)
    search_fields = ('name',)


@admin.register(TourPackage)
class TourPackageAdmin(admin.ModelAdmin):
    list_display = ('id', 'title', 'city', 'category', 'price')
    list_filter = ('city', 'category')
    search_fields = ('title',)


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'total_amount', 'currency', 'payment_method', 'payment_status', 'booking_status', 'created_at')
    list_filter = ('payment_status', 'booking_status', 'payment_method')
    search_fields = ('user__username', 'payment_transaction_id')


@admin.register(FlightBooking)
class FlightBookingAdmin(admin.ModelAdmin):
    list_display = ('booking_reference', 'user', 'airline', 'flight_number', 'departure_date', 'total_price', 'booking_status')
    list_filter = ('airline', 'flight_class', 'booking_status')
    search_fields = ('booking_reference', 'user__username')


@admin.register(AnalyticsEntry)
class AnalyticsEntryAdmin(admin.ModelAdmin):
    list_display = ('date', 'revenue', 'cost', 'profit', 'source')
    list_filter = ('source',)


@admin.register(AuditEvent)
class AuditEventAdmin(admin.ModelAdmin):
    list_display = ('created_at', 'user', 'action', 'object_type', 'object_id')
    list_filter = ('action', 'object_type')
    search_fields = ('user__username', 'action')
