"""
Service layer for business logic.
"""
from artroom.services.registration_service import RegistrationService
from artroom.services.lookup_service import LookupService
from artroom.services.binder_service import BinderService

__all__ = [
    "RegistrationService",
    "LookupService",
    "BinderService",
]
