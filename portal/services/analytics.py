from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db.models import Sum

from portal.models import AnalyticsEntry, Booking, Consultation, Doctor, Treatment
from portal.services.bookings import list_all_bookings
from portal.services.consultations import consultation_to_dict

User = get_user_model()


def admin_overview(latest: int=10) -> dict:
    sums = AnalyticsEntry.objects.aggregate(revenue=Sum('revenue'), cost=Sum('cost'), profit=Sum('profit'))
    zero = Decimal('0')
    return {
        'totalRevenue': float(sums['revenue'] or zero),
        'totalCost': float(sums['cost'] or zero),
        'totalProfit': float(sums['profit'] or zero),
        'totalBookings': Booking.objects.count(),
        'totalUsers': User.objects.count(),
        'totalConsultations': Consultation.objects.count(),
        'recentBookings': list_all_bookings(limit=latest),
    }


def list_users() -> list[dict]:
    return [{
        'id': u.id,
        'username': u.username,
        'name': u.get_full_name() or u.username,
        'email': u.email,
        'role': u.role,
        'country': u.country,
        'isActive': u.is_active,
        'dateJoined': u.date_joined.isoformat(),
    } for u in User.objects.order_by('-date_joined', '-id')]


def patient_overview(user: User, latest: int=5) -> dict:
    """Counters and latest consultations for the patient landing page."""
    own = Consultation.objects.filter(user=user)
    recent = own.select_related('doctor', 'doctor__hospital', 'treatment').order_by('-created_at', '-id')[:latest]
    return {
        'consultations': own.count(),
        'treatments': Treatment.objects.count(),
        'doctors': Doctor.objects.filter(verified=True).count(),
        'recentConsultations': [consultation_to_dict(c) for c in recent],
    }
