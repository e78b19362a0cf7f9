from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.db.models import Avg, Q

from portal.models import Treatment, Stay, TourPackage, Doctor, DoctorReview, CommunicationRequest, Hospital
from portal.services.audit import log_action
from portal.services.geo import hospital_to_dict

PRICE_RANGES = {
    'budget': (Decimal('20'), Decimal('50')),
    'mid': (Decimal('51'), Decimal('100')),
    'luxury': (Decimal('101'), Decimal('999')),
}


def _money(v) -> Optional[float]:
    return float(v) if v is not None else None


# ---------------------------------------------------------------------
# Treatments
# ---------------------------------------------------------------------
def treatment_to_dict(t: Treatment) -> dict:
    return {
        'id': t.id,
        'title': t.title,
        'category': t.category,
        'city': t.city,
        'description': t.description,
        'duration': t.duration,
        'featured': t.featured,
        'imageUrl': t.image_url,
        'priceInr': _money(t.price_inr),
        'priceUsd': _money(t.price_usd),
        'savingsPercent': t.savings_percent,
    }


def list_treatments(*, q: Optional[str]=None, category: Optional[str]=None, city: Optional[str]=None,
                    featured: Optional[bool]=None) -> list[dict]:
    qs = Treatment.objects.all()
    if q:
        qs = qs.filter(Q(title__icontains=q) | Q(description__icontains=q) | Q(city__icontains=q))
    if category:
        qs = qs.filter(category=category)
    if city:
        qs = qs.filter(city=city)
    if featured is not None:
        qs = qs.filter(featured=featured)
    return [treatment_to_dict(t) for t in qs.order_by('-featured', 'title', 'id')]


# ---------------------------------------------------------------------
# Stays
# ---------------------------------------------------------------------
def proximity_label(km) -> Optional[str]:
    if km is None:
        return None
    km = float(km)
    if km <= 2:
        return 'Very Close'
    if km <= 5:
        return 'Nearby'
    return 'Moderate Distance'


def stay_to_dict(s: Stay) -> dict:
    return {
        'id': s.id,
        'name': s.name,
        'city': s.city,
        'description': s.description,
        'hospitalProximityKm': _money(s.hospital_proximity_km),
        'proximity': proximity_label(s.hospital_proximity_km),
        'imageUrl': s.image_url,
        'pricePerNight': _money(s.price_per_night),
        'rating': float(s.rating),
        'amenities': s.amenities or [],
    }


def list_stays(*, q: Optional[str]=None, city: Optional[str]=None, price_range: Optional[str]=None) -> list[dict]:
    qs = Stay.objects.all()
    if q:
        qs = qs.filter(Q(name__icontains=q) | Q(city__icontains=q))
    if city:
        qs = qs.filter(city=city)
    if price_range:
        if price_range not in PRICE_RANGES:
            raise ValueError(f'Unknown price range: {price_range}')
        low, high = PRICE_RANGES[price_range]
        qs = qs.filter(price_per_night__gte=low, price_per_night__lte=high)
    return [stay_to_dict(s) for s in qs.order_by('-rating', 'id')]


# ---------------------------------------------------------------------
# Tour packages
# ---------------------------------------------------------------------
def package_to_dict(p: TourPackage) -> dict:
    return {
        'id': p.id,
        'title': p.title,
        'city': p.city,
        'category': p.category,
        'description': p.description,
        'duration': p.duration,
        'highlights': p.highlights or [],
        'imageUrl': p.image_url,
        'price': _money(p.price),
    }


def list_tour_packages(*, q: Optional[str]=None, city: Optional[str]=None, category: Optional[str]=None) -> list[dict]:
    qs = TourPackage.objects.all()
    if q:
        qs = qs.filter(Q(title__icontains=q) | Q(description__icontains=q))
    if city:
        qs = qs.filter(city=city)
    if category:
        qs = qs.filter(category=category)
    return [package_to_dict(p) for p in qs.order_by('-created_at', '-id')]


# ---------------------------------------------------------------------
# Doctors
# ---------------------------------------------------------------------
def doctor_to_dict(d: Doctor) -> dict:
    return {
        'id': d.id,
        'userId': d.user_id,
        'name': d.name,
        'specialization': d.specialization,
        'hospitalId': d.hospital_id,
        'hospitalName': d.hospital.name if d.hospital_id else d.hospital_name,
        'bio': d.bio,
        'rating': float(d.rating),
        'yearsExperience': d.years_experience,
        'consultationFee': _money(d.consultation_fee),
        'verified': d.verified,
        'slots': d.slots or [],
        'phone': d.phone,
        'languages': d.languages or [],
        'education': d.education,
        'certifications': d.certifications or [],
        'imageUrl': d.image_url,
    }


def review_to_dict(r: DoctorReview) -> dict:
    return {
        'id': r.id,
        'doctorId': r.doctor_id,
        'userId': r.user_id,
        'userName': r.user.get_full_name() or r.user.username,
        'rating': r.rating,
        'comment': r.comment,
        'createdAt': r.created_at.isoformat(),
    }


def list_doctors(*, q: Optional[str]=None, specialization: Optional[str]=None, hospital_id: Optional[int]=None,
                 verified: Optional[bool]=True) -> list[dict]:
    qs = Doctor.objects.select_related('hospital')
    if verified is not None:
        qs = qs.filter(verified=verified)
    if q:
        qs = qs.filter(Q(name__icontains=q) | Q(specialization__icontains=q) | Q(hospital_name__icontains=q)
                       | Q(hospital__name__icontains=q))
    if specialization:
        qs = qs.filter(specialization__icontains=specialization)
    if hospital_id:
        qs = qs.filter(hospital_id=hospital_id)
    return [doctor_to_dict(d) for d in qs.order_by('-rating', 'id')]


def doctor_detail(doctor_id: int) -> dict:
    d = Doctor.objects.select_related('hospital').get(id=doctor_id)
    data = doctor_to_dict(d)
    data['hospital'] = hospital_to_dict(d.hospital) if d.hospital_id else None
    reviews = DoctorReview.objects.filter(doctor=d).select_related('user').order_by('-created_at', '-id')[:10]
    data['reviews'] = [review_to_dict(r) for r in reviews]
    return data


def hospital_doctors(hospital_id: int) -> dict:
    h = Hospital.objects.get(id=hospital_id)
    doctors = Doctor.objects.filter(hospital=h).select_related('hospital').order_by('-rating', 'id')
    return {'hospital': hospital_to_dict(h), 'doctors': [doctor_to_dict(d) for d in doctors]}


@transaction.atomic
def add_review(user, doctor: Doctor, rating: int, comment: str='') -> DoctorReview:
    if not 1 <= int(rating) <= 5:
        raise ValueError('Rating must be between 1 and 5')
    review = DoctorReview.objects.create(doctor=doctor, user=user, rating=int(rating), comment=(comment or '').strip())
    avg = DoctorReview.objects.filter(doctor=doctor).aggregate(v=Avg('rating'))['v'] or 0
    doctor.rating = Decimal(str(round(avg, 2)))
    doctor.save(update_fields=['rating', 'updated_at'])
    log_action(user=user, action='doctor_review', object_type='doctor', object_id=doctor.id, detail={'rating': review.rating})
    return review


def request_communication(user, doctor: Doctor, message: str) -> CommunicationRequest:
    message = (message or '').strip()
    if not message:
        raise ValueError('Message cannot be empty')
    req = CommunicationRequest.objects.create(user=user, doctor=doctor, message=message, status='pending')
    log_action(user=user, action='communication_request', object_type='doctor', object_id=doctor.id, detail={'requestId': req.id})
    return req
