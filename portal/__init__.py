"""Portal application for the MediTravel backend.

This package contains models, services, serializers, views and route
registrations for the patient, doctor and admin facing API.
"""
