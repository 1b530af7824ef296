"""Emergency transport directory."""

from __future__ import annotations

import logging
from typing import Optional

from neomama.models import TransportService, TransportType

log = logging.getLogger(__name__)

EMERGENCY_LINE = "1190"
ALL_TYPES = "all"

SERVICE_TYPE_LABELS: dict[str, str] = {
    ALL_TYPES: "All Services",
    TransportType.AMBULANCE.value: "Ambulances",
    TransportType.FLYING_DOCTOR.value: "Flying Doctors",
    TransportType.HOSPITAL_TRANSPORT.value: "Hospital Transport",
}

TRANSPORT_SERVICES: list[TransportService] = [
    TransportService(
        id="1",
        name="Kenya National Ambulance Service",
        type=TransportType.AMBULANCE,
        phone="1190",
        coverage=["Nairobi", "Mombasa", "Kisumu", "Nakuru", "Eldoret"],
        response_time="8-15 min",
        cost="Free",
        features=["Life Support", "Trained Paramedics", "GPS Tracking"],
        rating=4.2,
        is_partner=True,
        has_nicu=False,
        specializations=["Emergency", "Maternity"],
    ),
    TransportService(
        id="2",
        name="AMREF Flying Doctors",
        type=TransportType.FLYING_DOCTOR,
        phone="+254 20 315 0000",
        coverage=["All Kenya", "Remote Areas", "Cross-border"],
        response_time="45-90 min",
        cost="KSh 150,000 - 500,000",
        features=["Air Ambulance", "Critical Care", "Remote Access"],
        rating=4.8,
        is_partner=True,
        has_nicu=True,
        specializations=["High-risk Pregnancy", "NICU Transport", "Critical Care"],
    ),
    TransportService(
        id="3",
        name="St. John Ambulance Kenya",
        type=TransportType.AMBULANCE,
        phone="+254 20 270 0000",
        coverage=["Nairobi", "Central Kenya", "Coast"],
        response_time="10-20 min",
        cost="KSh 3,000 - 8,000",
        features=["First Aid", "Basic Life Support", "Maternity Care"],
        rating=4.5,
        is_partner=True,
        has_nicu=False,
        specializations=["Maternity", "Emergency Response"],
    ),
    TransportService(
        id="4",
        name="Aga Khan Hospital Ambulance",
        type=TransportType.HOSPITAL_TRANSPORT,
        phone="+254 20 366 2000",
        coverage=["Nairobi", "Mombasa", "Kisumu"],
        response_time="5-12 min",
        cost="KSh 5,000 - 12,000",
        features=["Advanced Life Support", "Incubator", "Specialist Nurses"],
        rating=4.9,
        is_partner=True,
        has_nicu=True,
        specializations=["High-risk Maternity", "NICU", "Emergency Surgery"],
    ),
    TransportService(
        id="5",
        name="Nairobi Women's Hospital Transport",
        type=TransportType.HOSPITAL_TRANSPORT,
        phone="+254 20 272 0000",
        coverage=["Nairobi Metropolitan"],
        response_time="5-10 min",
        cost="KSh 4,000 - 10,000",
        features=["Maternity Specialist", "Newborn Care", "Emergency OB"],
        rating=4.7,
        is_partner=True,
        has_nicu=True,
        specializations=["Maternity Emergency", "C-Section Transport", "High-risk Delivery"],
    ),
    TransportService(
        id="6",
        name="AAR Healthcare Ambulance",
        type=TransportType.PRIVATE,
        phone="+254 703 091 000",
        coverage=["Nairobi", "Nakuru", "Eldoret"],
        response_time="8-15 min",
        cost="KSh 6,000 - 15,000",
        features=["Premium Service", "Family Support", "Insurance Coverage"],
        rating=4.6,
        is_partner=False,
        has_nicu=False,
        specializations=["Private Care", "Insurance Patients"],
    ),
]


def filter_services(
    service_type: str = ALL_TYPES,
    services: Optional[list[TransportService]] = None,
) -> list[TransportService]:
    """Services of one type, or all of them for ``"all"``."""
    services = TRANSPORT_SERVICES if services is None else services
    if service_type == ALL_TYPES:
        return list(services)
    return [s for s in services if s.type.value == service_type]


def services_covering(
    location: str,
    services: Optional[list[TransportService]] = None,
) -> list[TransportService]:
    """Services whose coverage mentions *location* (case-insensitive substring)."""
    services = TRANSPORT_SERVICES if services is None else services
    needle = location.strip().lower()
    return [s for s in services if any(needle in area.lower() for area in s.coverage)]


def get_service(service_id: str) -> Optional[TransportService]:
    for service in TRANSPORT_SERVICES:
        if service.id == service_id:
            return service
    return None


def call_service(phone: str, service_name: str) -> str:
    """Record a call request. No telephony: the number is returned for display."""
    log.info("Calling %s at %s", service_name, phone)
    return phone
