"""
URL mappings for the MediTravel API.

Trailing slashes are deliberately omitted.  Catalog reads are public;
everything that touches a user's data requires authentication.
"""
from django.urls import path, include

from .auth_views import login_view, register_view, jwt_refresh_view, jwt_logout_view
from .views import health
from .views.users import user_profile, user_profile_update, user_avatar_upload, change_password
from .views.catalog import (
    list_treatments,
    list_stays,
    list_tour_packages,
    list_doctors,
    doctor_detail,
    doctor_review,
    doctor_contact,
    hospital_doctors,
    hospital_search,
)
from .views.countries import country_data
from .views.flights import (
    flight_search,
    flight_seats,
    flight_meals,
    flight_services,
    flight_quote,
    flight_book,
    flight_bookings,
)
from .views.consultations import consultations, consultation_status, consultation_report
from .views.chat import chat_send, chat_history, chat_read
from .views.documents import (
    medical_records,
    medical_record_delete,
    passport_verification,
    admin_passport_list,
    admin_passport_review,
)
from .views.bookings import (
    booking_list_create,
    booking_detail,
    booking_cancel,
    admin_booking_list,
    admin_booking_status,
)
from .views.payments import (
    stripe_create_intent,
    stripe_confirm,
    razorpay_create_order,
    razorpay_verify,
    crypto_create,
    crypto_confirm,
)
from .views.dashboard import admin_audit, admin_dashboard, admin_users, admin_verify_doctor
from .views.doctor_dashboard import doctor_profile, doctor_consultations
from .views.patient_dashboard import patient_dashboard


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz),
    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/register', register_view, name='register_view'),
    path('api/auth/refresh', jwt_refresh_view),
    path('api/auth/logout', jwt_logout_view),
    # Profile
    path('api/user/profile', user_profile),
    path('api/user/profile/update', user_profile_update),
    path('api/user/avatar', user_avatar_upload),
    path('api/user/change-password', change_password),
    # Catalog
    path('api/treatments', list_treatments),
    path('api/stays', list_stays),
    path('api/tour-packages', list_tour_packages),
    path('api/doctors', list_doctors),
    path('api/doctors/<int:doctor_id>', doctor_detail),
    path('api/doctors/<int:doctor_id>/reviews', doctor_review),
    path('api/doctors/<int:doctor_id>/contact', doctor_contact),
    path('api/hospitals/search', hospital_search),
    path('api/hospitals/<int:hospital_id>/doctors', hospital_doctors),
    path('api/countries', country_data),
    # Flights
    path('api/flights/search', flight_search),
    path('api/flights/seats', flight_seats),
    path('api/flights/meals', flight_meals),
    path('api/flights/services', flight_services),
    path('api/flights/quote', flight_quote),
    path('api/flights/book', flight_book),
    path('api/flights/bookings', flight_bookings),
    # Consultations & chat
    path('api/consultations', consultations),
    path('api/consultations/<int:consultation_id>/status', consultation_status),
    path('api/consultations/<int:consultation_id>/report', consultation_report),
    path('api/chat/send', chat_send),
    path('api/chat/history', chat_history),
    path('api/chat/read', chat_read),
    # Documents
    path('api/records', medical_records),
    path('api/records/<int:record_id>', medical_record_delete),
    path('api/passport', passport_verification),
    # Bookings
    path('api/bookings', booking_list_create),
    path('api/bookings/<int:booking_id>', booking_detail),
    path('api/bookings/<int:booking_id>/cancel', booking_cancel),
    # Payments
    path('api/payments/stripe/intent', stripe_create_intent),
    path('api/payments/stripe/confirm', stripe_confirm),
    path('api/payments/razorpay/order', razorpay_create_order),
    path('api/payments/razorpay/verify', razorpay_verify),
    path('api/payments/crypto', crypto_create),
    # Patient dashboard
    path('api/dashboard', patient_dashboard),
    # Doctor dashboard
    path('api/doctor/profile', doctor_profile),
    path('api/doctor/consultations', doctor_consultations),
    # Admin
    path('api/admin/dashboard', admin_dashboard),
    path('api/admin/users', admin_users),
    path('api/admin/audit', admin_audit),
    path('api/admin/bookings', admin_booking_list),
    path('api/admin/bookings/<int:booking_id>/status', admin_booking_status),
    path('api/admin/doctors/<int:doctor_id>/verify', admin_verify_doctor),
    path('api/admin/passports', admin_passport_list),
    path('api/admin/passports/<int:verification_id>/review', admin_passport_review),
    path('api/admin/payments/crypto/confirm', crypto_confirm),
]
