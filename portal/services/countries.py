"""
Static country reference data for medical travel destinations.
"""
from __future__ import annotations

import copy
from typing import Optional

ACTIONS = ('get-country', 'get-all-countries', 'get-hospitals', 'get-hotels')

COUNTRIES: dict[str, dict] = {
    'IN': {
        'name': 'India',
        'code': 'IN',
        'phoneCode': '+91',
        'currency': 'INR',
        'language': 'Hindi, English',
        'timezone': 'IST',
        'hospitals': {
            'total': 45000,
            'multiSpecialty': 1200,
            'government': 25000,
            'private': 20000,
            'specialties': [
                'Cardiology', 'Oncology', 'Neurology', 'Orthopedics',
                'Gastroenterology', 'Nephrology', 'Pediatrics', 'Gynecology',
            ],
            'topHospitals': [
                {'name': 'AIIMS Delhi', 'type': 'Government', 'specialties': ['Multi-specialty'], 'beds': 2500, 'rating': 4.8},
                {'name': 'Apollo Hospital Chennai', 'type': 'Private',
                 'specialties': ['Cardiology', 'Oncology', 'Transplants'], 'beds': 1000, 'rating': 4.7},
                {'name': 'Fortis Healthcare', 'type': 'Private',
                 'specialties': ['Oncology', 'Neurology', 'Orthopedics'], 'beds': 800, 'rating': 4.6},
            ],
        },
        'hotels': {
            'total': 85000,
            'luxury': 500,
            'budget': 60000,
            'midRange': 24500,
            'averageRates': {'luxury': 15000, 'midRange': 4000, 'budget': 1500},
            'popularChains': ['Taj Hotels', 'Oberoi', 'ITC Hotels', 'Marriott', 'Hyatt'],
        },
        'cities': [
            {'name': 'Delhi', 'hospitals': 250, 'hotels': 2500, 'medicalTourism': True, 'airportCode': 'DEL'},
            {'name': 'Mumbai', 'hospitals': 180, 'hotels': 1800, 'medicalTourism': True, 'airportCode': 'BOM'},
            {'name': 'Chennai', 'hospitals': 120, 'hotels': 800, 'medicalTourism': True, 'airportCode': 'MAA'},
            {'name': 'Bangalore', 'hospitals': 150, 'hotels': 1200, 'medicalTourism': True, 'airportCode': 'BLR'},
        ],
    },
    'TH': {
        'name': 'Thailand',
        'code': 'TH',
        'phoneCode': '+66',
        'currency': 'THB',
        'language': 'Thai, English',
        'timezone': 'ICT',
        'hospitals': {
            'total': 1200,
            'multiSpecialty': 85,
            'government': 800,
            'private': 400,
            'specialties': [
                'Plastic Surgery', 'Dental Care', 'Cardiology', 'Oncology',
                'Orthopedics', 'Fertility Treatment', 'Wellness',
            ],
            'topHospitals': [
                {'name': 'Bumrungrad International Hospital', 'type': 'Private',
                 'specialties': ['Multi-specialty', 'Medical Tourism'], 'beds': 580, 'rating': 4.9},
                {'name': 'Bangkok Hospital', 'type': 'Private',
                 'specialties': ['Cardiology', 'Neurology', 'Oncology'], 'beds': 450, 'rating': 4.7},
            ],
        },
        'hotels': {
            'total': 12000,
            'luxury': 300,
            'budget': 8000,
            'midRange': 3700,
            'averageRates': {'luxury': 8000, 'midRange': 2500, 'budget': 800},
            'popularChains': ['Marriott', 'Hilton', 'Shangri-La', 'InterContinental', 'Centara'],
        },
        'cities': [
            {'name': 'Bangkok', 'hospitals': 45, 'hotels': 2000, 'medicalTourism': True, 'airportCode': 'BKK'},
            {'name': 'Phuket', 'hospitals': 12, 'hotels': 800, 'medicalTourism': True, 'airportCode': 'HKT'},
        ],
    },
    'SG': {
        'name': 'Singapore',
        'code': 'SG',
        'phoneCode': '+65',
        'currency': 'SGD',
        'language': 'English, Mandarin, Malay, Tamil',
        'timezone': 'SGT',
        'hospitals': {
            'total': 28,
            'multiSpecialty': 15,
            'government': 8,
            'private': 20,
            'specialties': [
                'Oncology', 'Cardiology', 'Neurology', 'Orthopedics',
                'Transplants', 'Plastic Surgery', 'Advanced Diagnostics',
            ],
            'topHospitals': [
                {'name': 'Singapore General Hospital', 'type': 'Government',
                 'specialties': ['Multi-specialty', 'Research'], 'beds': 1785, 'rating': 4.9},
                {'name': 'Mount Elizabeth Hospital', 'type': 'Private',
                 'specialties': ['Cardiology', 'Oncology', 'Neurology'], 'beds': 345, 'rating': 4.8},
            ],
        },
        'hotels': {
            'total': 400,
            'luxury': 50,
            'budget': 150,
            'midRange': 200,
            'averageRates': {'luxury': 25000, 'midRange': 8000, 'budget': 3000},
            'popularChains': ['Marina Bay Sands', 'Raffles', 'Shangri-La', 'Marriott', 'Hilton'],
        },
        'cities': [
            {'name': 'Singapore', 'hospitals': 28, 'hotels': 400, 'medicalTourism': True, 'airportCode': 'SIN'},
        ],
    },
}


def get_country(code: Optional[str]) -> dict:
    if not code:
        raise ValueError('Country code required')
    country = COUNTRIES.get(code.strip().upper())
    if country is None:
        raise LookupError('Country not found')
    # callers may mutate the result
    return copy.deepcopy(country)


def all_countries() -> list[dict]:
    return [copy.deepcopy(c) for c in COUNTRIES.values()]


def country_hospitals(code: Optional[str], city: Optional[str]=None) -> dict:
    country = get_country(code)
    data = country['hospitals']
    if city:
        match = next((c for c in country['cities'] if c['name'].lower() == city.strip().lower()), None)
        if match:
            data['citySpecific'] = match
    return data


def country_hotels(code: Optional[str]) -> dict:
    return get_country(code)['hotels']


def dispatch(action: Optional[str], code: Optional[str]=None, city: Optional[str]=None):
    """Run one of ``ACTIONS``; raises ValueError / LookupError like the single operations."""
    if action == 'get-country':
        return get_country(code)
    if action == 'get-all-countries':
        return all_countries()
    if action == 'get-hospitals':
        return country_hospitals(code, city)
    if action == 'get-hotels':
        return country_hotels(code)
    raise ValueError('Invalid action. Available actions: ' + ', '.join(ACTIONS))
