"""
Management command to populate the database with catalog test data.

Idempotent: rows are matched by name/title so the command can be re-run.
"""
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from portal.models import Hospital, Doctor, Treatment, Stay, TourPackage


HOSPITALS = [
    {
        'name': 'Apollo Hospitals Greams Road', 'city': 'Chennai', 'state': 'Tamil Nadu',
        'address': '21 Greams Lane, Off Greams Road, Chennai', 'latitude': 13.0604, 'longitude': 80.2496,
        'specializations': ['Cardiology', 'Oncology', 'Orthopedics'], 'rating': '4.7',
        'total_beds': 560, 'icu_beds': 80, 'emergency_available': True, 'accreditations': ['JCI', 'NABH'],
    },
    {
        'name': 'MIOT International', 'city': 'Chennai', 'state': 'Tamil Nadu',
        'address': '4/112 Mount Poonamallee Road, Manapakkam, Chennai', 'latitude': 13.0213, 'longitude': 80.1856,
        'specializations': ['Orthopedics', 'Nephrology'], 'rating': '4.5',
        'total_beds': 1000, 'icu_beds': 120, 'emergency_available': True, 'accreditations': ['JCI'],
    },
    {
        'name': 'Narayana Health City', 'city': 'Bengaluru', 'state': 'Karnataka',
        'address': '258/A Bommasandra Industrial Area, Bengaluru', 'latitude': 12.8139, 'longitude': 77.6946,
        'specializations': ['Cardiology', 'Neurosurgery'], 'rating': '4.6',
        'total_beds': 1400, 'icu_beds': 150, 'emergency_available': True, 'accreditations': ['JCI', 'NABH'],
    },
    {
        'name': 'Manipal Hospital Old Airport Road', 'city': 'Bengaluru', 'state': 'Karnataka',
        'address': '98 HAL Old Airport Road, Bengaluru', 'latitude': 12.9592, 'longitude': 77.6485,
        'specializations': ['Oncology', 'IVF & Fertility', 'Ophthalmology'], 'rating': '4.5',
        'total_beds': 600, 'icu_beds': 90, 'emergency_available': True, 'accreditations': ['NABH'],
    },
    {
        'name': 'Kokilaben Dhirubhai Ambani Hospital', 'city': 'Mumbai', 'state': 'Maharashtra',
        'address': 'Rao Saheb Achutrao Patwardhan Marg, Andheri West, Mumbai', 'latitude': 19.1310, 'longitude': 72.8250,
        'specializations': ['Neurosurgery', 'Oncology', 'Cosmetic Surgery'], 'rating': '4.6',
        'total_beds': 750, 'icu_beds': 110, 'emergency_available': True, 'accreditations': ['JCI', 'NABH'],
    },
    {
        'name': 'KIMS Hospitals', 'city': 'Hyderabad', 'state': 'Telangana',
        'address': '1-8-31/1 Minister Road, Secunderabad', 'latitude': 17.4399, 'longitude': 78.4983,
        'specializations': ['Cardiology', 'Orthopedics', 'Wellness'], 'rating': '4.4',
        'total_beds': 1000, 'icu_beds': 100, 'emergency_available': True, 'accreditations': ['NABH'],
    },
]

DOCTORS = [
    ('Dr. Priya Raman', 'Cardiology', 'Apollo Hospitals Greams Road', 22, '80'),
    ('Dr. Arjun Menon', 'Orthopedics', 'MIOT International', 18, '70'),
    ('Dr. Kavya Shetty', 'Neurosurgery', 'Narayana Health City', 15, '90'),
    ('Dr. Rahul Nair', 'Oncology', 'Manipal Hospital Old Airport Road', 20, '85'),
    ('Dr. Meera Kapoor', 'IVF & Fertility', 'Manipal Hospital Old Airport Road', 12, '60'),
    ('Dr. Vikram Desai', 'Cosmetic Surgery', 'Kokilaben Dhirubhai Ambani Hospital', 14, '75'),
    ('Dr. Sanjay Reddy', 'Cardiology', 'KIMS Hospitals', 25, '65'),
]

# title, category, city, description, duration, featured, price_usd, savings
TREATMENTS = [
    ('Cardiac Surgery', 'Cardiology', 'Chennai',
     'World-class heart treatments including bypass, valve replacement, and angioplasty', '5-7 days', True, '5500', 85),
    ('Orthopedic Surgery', 'Orthopedics', 'Chennai',
     'Hip/knee replacements, spine surgery, and sports medicine treatments', '7-10 days', True, '5500', 80),
    ('Eye Care', 'Ophthalmology', 'Bengaluru',
     'LASIK, cataract surgery, retinal treatments, and corneal transplants', '2-3 days', False, '1250', 75),
    ('Neurosurgery', 'Neurosurgery', 'Bengaluru',
     'Brain tumor removal, spine surgery, and neurological treatments', '7-14 days', False, '8500', 88),
    ('IVF & Fertility', 'IVF & Fertility', 'Bengaluru',
     'In vitro fertilization, fertility treatments, and reproductive health', '2-4 weeks', True, '3250', 78),
    ('Cosmetic Surgery', 'Cosmetic Surgery', 'Mumbai',
     'Plastic surgery, hair transplant, and aesthetic procedures', '3-5 days', False, '3250', 70),
    ('Cancer Treatment', 'Oncology', 'Mumbai',
     'Comprehensive oncology care with latest treatments and therapies', '2-8 weeks', True, '9000', 85),
    ('Wellness Packages', 'Wellness', 'Hyderabad',
     'Preventive health checkups and comprehensive medical screenings', '1-2 days', False, '550', 70),
]

# name, city, km to nearest partner hospital, price per night, rating, amenities
STAYS = [
    ('Greams Residency', 'Chennai', '1.2', '45', '4.2', ['WiFi', 'Airport Pickup', 'Kitchenette']),
    ('Marina Bay Suites', 'Chennai', '4.5', '85', '4.5', ['WiFi', 'Pool', 'Breakfast']),
    ('Whitefield Serviced Apartments', 'Bengaluru', '3.8', '60', '4.3', ['WiFi', 'Laundry', 'Kitchen']),
    ('The Garden Palace', 'Bengaluru', '7.5', '150', '4.8', ['WiFi', 'Spa', 'Pool', 'Concierge']),
    ('Andheri Care Stay', 'Mumbai', '0.9', '35', '4.0', ['WiFi', 'Nurse on Call']),
    ('Banjara Hills Retreat', 'Hyderabad', '5.6', '110', '4.6', ['WiFi', 'Pool', 'Restaurant']),
]

# title, city, category, duration, price, highlights
TOUR_PACKAGES = [
    ('Chennai Heritage Walk', 'Chennai', 'Cultural', '1 day', '40', ['Kapaleeshwarar Temple', 'Fort St. George']),
    ('Mahabalipuram Shore Temples', 'Chennai', 'Heritage', '1 day', '65', ['Shore Temple', 'Five Rathas']),
    ('Mysore Palace Day Trip', 'Bengaluru', 'Heritage', '1 day', '80', ['Mysore Palace', 'Chamundi Hills']),
    ('Ayurveda Recovery Retreat', 'Bengaluru', 'Wellness', '5 days', '450', ['Daily therapy', 'Yoga', 'Diet plan']),
    ('Mumbai City Lights', 'Mumbai', 'Cultural', '1 day', '55', ['Gateway of India', 'Marine Drive']),
    ('Golconda & Charminar', 'Hyderabad', 'Heritage', '1 day', '50', ['Golconda Fort', 'Charminar']),
]


class Command(BaseCommand):
    help = 'Populate database with catalog test data'

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write('Creating test data...')
        hospitals = self.create_hospitals()
        self.create_doctors(hospitals)
        self.create_treatments()
        self.create_stays()
        self.create_tour_packages()
        self.stdout.write(self.style.SUCCESS('Test data created.'))

    def create_hospitals(self):
        hospitals = {}
        for data in HOSPITALS:
            data = dict(data)
            name = data.pop('name')
            data['rating'] = Decimal(data['rating'])
            h, _ = Hospital.objects.update_or_create(name=name, defaults=data)
            hospitals[name] = h
        self.stdout.write(f'  hospitals: {len(hospitals)}')
        return hospitals

    def create_doctors(self, hospitals):
        for name, specialization, hospital_name, years, fee in DOCTORS:
            hospital = hospitals[hospital_name]
            Doctor.objects.update_or_create(name=name, defaults={
                'specialization': specialization,
                'hospital': hospital,
                'hospital_name': hospital.name,
                'years_experience': years,
                'consultation_fee': Decimal(fee),
                'verified': True,
                'languages': ['English', 'Hindi'],
                'slots': ['09:00', '11:00', '15:00'],
            })
        self.stdout.write(f'  doctors: {len(DOCTORS)}')

    def create_treatments(self):
        for title, category, city, description, duration, featured, usd, savings in TREATMENTS:
            Treatment.objects.update_or_create(title=title, city=city, defaults={
                'category': category,
                'description': description,
                'duration': duration,
                'featured': featured,
                'price_usd': Decimal(usd),
                'price_inr': Decimal(usd) * 83,
                'savings_percent': savings,
            })
        self.stdout.write(f'  treatments: {len(TREATMENTS)}')

    def create_stays(self):
        for name, city, km, price, rating, amenities in STAYS:
            Stay.objects.update_or_create(name=name, city=city, defaults={
                'hospital_proximity_km': Decimal(km),
                'price_per_night': Decimal(price),
                'rating': Decimal(rating),
                'amenities': amenities,
            })
        self.stdout.write(f'  stays: {len(STAYS)}')

    def create_tour_packages(self):
        for title, city, category, duration, price, highlights in TOUR_PACKAGES:
            TourPackage.objects.update_or_create(title=title, city=city, defaults={
                'category': category,
                'duration': duration,
                'price': Decimal(price),
                'highlights': highlights,
            })
        self.stdout.write(f'  tour packages: {len(TOUR_PACKAGES)}')
