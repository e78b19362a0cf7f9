"""
Distance calculations and the city-radius hospital search.
"""
from __future__ import annotations

import math
from typing import Optional

from django.db.models import Q

from portal.models import Hospital

EARTH_RADIUS_KM = 6371.0

CITY_CENTRES: dict[str, tuple[float, float]] = {
    'Bengaluru': (12.9716, 77.5946),
    'Mumbai': (19.0760, 72.8777),
    'Chennai': (13.0827, 80.2707),
    'Delhi': (28.7041, 77.1025),
    'Hyderabad': (17.3850, 78.4867),
    'Kolkata': (22.5726, 88.3639),
    'Pune': (18.5204, 73.8567),
    'Ahmedabad': (23.0225, 72.5714),
}

MIN_RADIUS_KM = 10
MAX_RADIUS_KM = 200
DEFAULT_RADIUS_KM = 50


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def city_centre(city: str) -> tuple[float, float]:
    key = (city or '').strip().lower()
    for name, coords in CITY_CENTRES.items():
        if name.lower() == key:
            return coords
    raise ValueError(f'Unknown city: {city}')


def clamp_radius(radius_km: Optional[float]) -> float:
    if radius_km is None:
        return DEFAULT_RADIUS_KM
    return max(MIN_RADIUS_KM, min(MAX_RADIUS_KM, float(radius_km)))


def _matches_specialization(h: Hospital, specialization: str) -> bool:
    needle = specialization.lower()
    return any(needle in (s or '').lower() for s in (h.specializations or []))


def _matches_text(h: Hospital, q: str) -> bool:
    needle = q.lower()
    haystack = [h.name or '', h.address or '', h.description or ''] + list(h.specializations or [])
    return any(needle in (v or '').lower() for v in haystack)


def search_hospitals(city: str, radius_km: Optional[float]=None, *, specialization: Optional[str]=None,
                     q: Optional[str]=None) -> list[dict]:
    """Hospitals within ``radius_km`` of the city centre, nearest first."""
    lat0, lon0 = city_centre(city)
    radius = clamp_radius(radius_km)

    qs = Hospital.objects.filter(latitude__isnull=False, longitude__isnull=False)
    # JSON list fields are filtered in Python for database portability
    if q:
        qs = qs.filter(Q(name__icontains=q) | Q(address__icontains=q) | Q(description__icontains=q)
                       | Q(specializations__icontains=q))

    results = []
    for h in qs:
        if specialization and not _matches_specialization(h, specialization):
            continue
        if q and not _matches_text(h, q):
            continue
        distance = haversine_km(lat0, lon0, h.latitude, h.longitude)
        if distance > radius:
            continue
        item = hospital_to_dict(h)
        item['distance'] = round(distance, 2)
        results.append(item)
    results.sort(key=lambda x: x['distance'])
    return results


def hospital_to_dict(h: Hospital) -> dict:
    return {
        'id': h.id,
        'name': h.name,
        'address': h.address,
        'city': h.city,
        'state': h.state,
        'latitude': h.latitude,
        'longitude': h.longitude,
        'phone': h.phone,
        'email': h.email,
        'website': h.website,
        'specializations': h.specializations or [],
        'rating': float(h.rating),
        'totalBeds': h.total_beds,
        'icuBeds': h.icu_beds,
        'emergencyAvailable': h.emergency_available,
        'accreditations': h.accreditations or [],
        'description': h.description,
    }
