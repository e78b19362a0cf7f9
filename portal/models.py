"""
Database models for the MediTravel backend.

These models capture the catalog (treatments, hospitals, doctors, stays
and tour packages), the patient journey (consultations, chat, medical
records, passport verification) and the purchase side (bookings, flight
bookings, analytics).  Each record is flat with foreign keys; statuses
are plain strings with known values but no enforced transition graph.
"""
from __future__ import annotations

import datetime
import os
import uuid

from django.contrib.auth.models import AbstractUser
from django.db import models


def _upload_path(prefix: str, instance, filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower()
    owner = None
    for attr in ('user_id', 'uploaded_by_id', 'sender_id', 'pk'):
        owner = getattr(instance, attr, None)
        if owner:
            break
    return f"{prefix}/{owner or 'anon'}/{datetime.date.today().strftime('%Y/%m')}/{uuid.uuid4().hex}{ext}"


def avatar_upload(instance, filename):
    return _upload_path('profile-images', instance, filename)

def passport_upload(instance, filename):
    return _upload_path('passport-documents', instance, filename)

def record_upload(instance, filename):
    return _upload_path('medical-records', instance, filename)

def report_upload(instance, filename):
    return _upload_path('medical-reports', instance, filename)

def chat_upload(instance, filename):
    return _upload_path('chat-attachments', instance, filename)


class User(AbstractUser):
    """Custom user model carrying the profile fields and a role.

    Roles: 'patient', 'doctor' and 'admin'.  Self-registration can only
    produce patients and doctors.
    """
    ROLE_PATIENT = 'patient'
    ROLE_DOCTOR = 'doctor'
    ROLE_ADMIN = 'admin'
    ROLE_CHOICES = [
        (ROLE_PATIENT, 'Patient'),
        (ROLE_DOCTOR, 'Doctor'),
        (ROLE_ADMIN, 'Administrator'),
    ]
    role = models.CharField(max_length=10, choices=ROLE_CHOICES, default=ROLE_PATIENT, db_index=True)
    phone = models.CharField(max_length=32, blank=True)
    country = models.CharField(max_length=64, blank=True)
    country_code = models.CharField(max_length=8, blank=True)
    avatar = models.FileField(upload_to=avatar_upload, max_length=512, blank=True)

    @property
    def display_name(self) -> str:
        return self.get_full_name() or self.username

    def __str__(self) -> str:
        return f"{self.username} ({self.role})"


class Hospital(models.Model):
    name = models.CharField(max_length=255)
    address = models.CharField(max_length=512, blank=True)
    city = models.CharField(max_length=100, db_index=True)
    state = models.CharField(max_length=100, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    email = models.EmailField(blank=True)
    website = models.URLField(blank=True)
    specializations = models.JSONField(default=list, blank=True)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    total_beds = models.PositiveIntegerField(default=0)
    icu_beds = models.PositiveIntegerField(default=0)
    emergency_available = models.BooleanField(default=False)
    accreditations = models.JSONField(default=list, blank=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"


class Doctor(models.Model):
    """A doctor listing.  ``user`` is set when a doctor account owns it."""
    user = models.OneToOneField(User, null=True, blank=True, on_delete=models.SET_NULL, related_name='doctor_profile')
    name = models.CharField(max_length=255)
    specialization = models.CharField(max_length=128, db_index=True)
    hospital = models.ForeignKey(Hospital, null=True, blank=True, on_delete=models.SET_NULL, related_name='doctors')
    # Free-text affiliation edited from the doctor dashboard
    hospital_name = models.CharField(max_length=255, blank=True)
    bio = models.TextField(blank=True)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    years_experience = models.PositiveIntegerField(default=0)
    consultation_fee = models.DecimalField(max_digits=10, decimal_places=2, default=0)
    verified = models.BooleanField(default=False, db_index=True)
    slots = models.JSONField(default=list, blank=True)
    phone = models.CharField(max_length=32, blank=True)
    languages = models.JSONField(default=list, blank=True)
    education = models.TextField(blank=True)
    certifications = models.JSONField(default=list, blank=True)
    image_url = models.URLField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"Dr. {self.name} ({self.specialization})"


class DoctorReview(models.Model):
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='reviews')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='doctor_reviews')
    rating = models.PositiveSmallIntegerField()
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['doctor', 'created_at'], name='review_doctor_created_idx')]

    def __str__(self) -> str:
        return f"review {self.rating} for {self.doctor_id} by {self.user_id}"


class CommunicationRequest(models.Model):
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='communication_requests')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='communication_requests')
    message = models.TextField()
    status = models.CharField(max_length=20, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"request {self.id} u={self.user_id} d={self.doctor_id}"


class Treatment(models.Model):
    title = models.CharField(max_length=255)
    category = models.CharField(max_length=100, blank=True, db_index=True)
    city = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True)
    duration = models.CharField(max_length=100, blank=True)
    featured = models.BooleanField(default=False)
    image_url = models.URLField(blank=True)
    price_inr = models.DecimalField(max_digits=12, decimal_places=2)
    price_usd = models.DecimalField(max_digits=12, decimal_places=2)
    savings_percent = models.PositiveIntegerField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.title} ({self.city})"


class Consultation(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_CONFIRMED = 'confirmed'
    STATUS_COMPLETED = 'completed'
    STATUS_CANCELLED = 'cancelled'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_CONFIRMED, 'confirmed'),
        (STATUS_COMPLETED, 'completed'),
        (STATUS_CANCELLED, 'cancelled'),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='consultations')
    doctor = models.ForeignKey(Doctor, on_delete=models.CASCADE, related_name='consultations')
    treatment = models.ForeignKey(Treatment, null=True, blank=True, on_delete=models.SET_NULL, related_name='consultations')
    consultation_date = models.DateTimeField(null=True, blank=True)
    notes = models.TextField(blank=True)
    medical_condition = models.CharField(max_length=255, blank=True)
    report = models.FileField(upload_to=report_upload, max_length=512, blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [
            models.Index(fields=['user', 'created_at'], name='consult_user_created_idx'),
            models.Index(fields=['doctor', 'created_at'], name='consult_doctor_created_idx'),
        ]

    def __str__(self) -> str:
        return f"consultation {self.id} u={self.user_id} d={self.doctor_id}"


class ChatMessage(models.Model):
    SENDER_CHOICES = (('patient', 'patient'), ('doctor', 'doctor'))
    TYPE_CHOICES = (('text', 'text'), ('image', 'image'), ('file', 'file'))

    consultation = models.ForeignKey(Consultation, on_delete=models.CASCADE, related_name='messages')
    sender = models.ForeignKey(User, on_delete=models.CASCADE, related_name='chat_messages')
    sender_type = models.CharField(max_length=10, choices=SENDER_CHOICES)
    message_type = models.CharField(max_length=10, choices=TYPE_CHOICES, default='text')
    content = models.TextField(blank=True, default='')
    file = models.FileField(upload_to=chat_upload, max_length=512, blank=True)
    read_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['consultation', 'created_at'], name='chat_consult_created_idx')]

    def __str__(self) -> str:
        return f"msg {self.id} consultation={self.consultation_id}"


class MedicalRecord(models.Model):
    uploaded_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name='medical_records')
    consultation = models.ForeignKey(
        Consultation, null=True, blank=True, on_delete=models.SET_NULL, related_name='medical_records'
    )
    file = models.FileField(upload_to=record_upload, max_length=512)
    file_name = models.CharField(max_length=255)
    file_type = models.CharField(max_length=128, blank=True)
    file_size = models.PositiveIntegerField(default=0)
    record_type = models.CharField(max_length=64, blank=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"{self.file_name} ({self.uploaded_by_id})"


class PassportVerification(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_APPROVED = 'approved'
    STATUS_REJECTED = 'rejected'
    STATUS_CHOICES = (
        (STATUS_PENDING, 'pending'),
        (STATUS_APPROVED, 'approved'),
        (STATUS_REJECTED, 'rejected'),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='passport_verifications')
    passport_image = models.FileField(upload_to=passport_upload, max_length=512)
    selfie_image = models.FileField(upload_to=passport_upload, max_length=512)
    passport_number = models.CharField(max_length=32)
    passport_country = models.CharField(max_length=64)
    passport_expiry = models.DateField()
    verification_status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_PENDING, db_index=True)
    reviewed_by = models.ForeignKey(
        User, null=True, blank=True, on_delete=models.SET_NULL, related_name='reviewed_verifications'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    review_note = models.CharField(max_length=255, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"passport {self.id} u={self.user_id} {self.verification_status}"


class Stay(models.Model):
    name = models.CharField(max_length=255)
    city = models.CharField(max_length=100, db_index=True)
    description = models.TextField(blank=True)
    hospital_proximity_km = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    image_url = models.URLField(blank=True)
    price_per_night = models.DecimalField(max_digits=10, decimal_places=2)
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    amenities = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return f"{self.name} ({self.city})"


class TourPackage(models.Model):
    title = models.CharField(max_length=255)
    city = models.CharField(max_length=100, db_index=True)
    category = models.CharField(max_length=100, blank=True)
    description = models.TextField(blank=True)
    duration = models.CharField(max_length=100, blank=True)
    highlights = models.JSONField(default=list, blank=True)
    image_url = models.URLField(blank=True)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.title


class Booking(models.Model):
    """A purchase of one consultation, tour package or stay."""
    PAYMENT_METHOD_CHOICES = (('stripe', 'stripe'), ('razorpay', 'razorpay'), ('crypto', 'crypto'))
    PAYMENT_PENDING = 'pending'
    PAYMENT_PENDING_CRYPTO = 'pending_crypto'
    PAYMENT_PAID = 'paid'
    PAYMENT_FAILED = 'failed'
    PAYMENT_REFUNDED = 'refunded'
    PAYMENT_STATUS_CHOICES = (
        (PAYMENT_PENDING, 'pending'),
        (PAYMENT_PENDING_CRYPTO, 'pending_crypto'),
        (PAYMENT_PAID, 'paid'),
        (PAYMENT_FAILED, 'failed'),
        (PAYMENT_REFUNDED, 'refunded'),
    )
    BOOKING_STATUS_CHOICES = (
        ('pending', 'pending'),
        ('confirmed', 'confirmed'),
        ('cancelled', 'cancelled'),
        ('completed', 'completed'),
    )

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='bookings')
    consultation = models.ForeignKey(Consultation, null=True, blank=True, on_delete=models.SET_NULL, related_name='bookings')
    tour_package = models.ForeignKey(TourPackage, null=True, blank=True, on_delete=models.SET_NULL, related_name='bookings')
    stay = models.ForeignKey(Stay, null=True, blank=True, on_delete=models.SET_NULL, related_name='bookings')
    nights = models.PositiveIntegerField(null=True, blank=True)
    passport_number = models.CharField(max_length=32, blank=True)
    passport_expiry = models.DateField(null=True, blank=True)
    passport_country = models.CharField(max_length=64, blank=True)
    pickup_address = models.TextField(blank=True)
    drop_address = models.TextField(blank=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='USD')
    payment_status = models.CharField(max_length=20, choices=PAYMENT_STATUS_CHOICES, default=PAYMENT_PENDING, db_index=True)
    payment_method = models.CharField(max_length=10, choices=PAYMENT_METHOD_CHOICES, blank=True)
    payment_transaction_id = models.CharField(max_length=128, blank=True)
    booking_status = models.CharField(max_length=20, choices=BOOKING_STATUS_CHOICES, default='pending', db_index=True)
    crypto_currency = models.CharField(max_length=8, blank=True)
    crypto_amount = models.DecimalField(max_digits=24, decimal_places=8, null=True, blank=True)
    crypto_address = models.CharField(max_length=128, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=['user', 'created_at'], name='booking_user_created_idx')]

    @property
    def item_type(self) -> str | None:
        if self.tour_package_id:
            return 'tour'
        if self.consultation_id:
            return 'consultation'
        if self.stay_id:
            return 'stay'
        return None

    def __str__(self) -> str:
        return f"booking {self.id} u={self.user_id} {self.booking_status}/{self.payment_status}"


class FlightBooking(models.Model):
    """Summary of a booked flight offer with the wizard selections snapshotted."""
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='flight_bookings')
    airline = models.CharField(max_length=64)
    flight_number = models.CharField(max_length=16)
    aircraft = models.CharField(max_length=64, blank=True)
    departure_city = models.CharField(max_length=100)
    arrival_city = models.CharField(max_length=100)
    departure_date = models.DateField()
    return_date = models.DateField(null=True, blank=True)
    passenger_count = models.PositiveIntegerField()
    flight_class = models.CharField(max_length=20, default='economy')
    base_fare = models.PositiveIntegerField(default=0)
    seat_fees = models.PositiveIntegerField(default=0)
    meal_fees = models.PositiveIntegerField(default=0)
    service_fees = models.PositiveIntegerField(default=0)
    total_price = models.PositiveIntegerField()
    booking_status = models.CharField(max_length=20, default='confirmed')
    booking_reference = models.CharField(max_length=32, unique=True)
    passengers = models.JSONField(default=list, blank=True)
    seats = models.JSONField(default=list, blank=True)
    meals = models.JSONField(default=list, blank=True)
    services = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [models.Index(fields=['user', 'created_at'], name='flight_user_created_idx')]

    def __str__(self) -> str:
        return f"{self.booking_reference} {self.departure_city}->{self.arrival_city}"


class AnalyticsEntry(models.Model):
    date = models.DateField(db_index=True)
    revenue = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    cost = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    profit = models.DecimalField(max_digits=14, decimal_places=2, default=0)
    source = models.CharField(max_length=64, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self) -> str:
        return f"analytics {self.date} r={self.revenue}"


class AuditEvent(models.Model):
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.IntegerField(blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
        ]

    def __str__(self) -> str:
        return f"{self.action}:{self.user_id}@{self.created_at:%F %T}"
