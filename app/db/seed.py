# app/db/seed.py
"""Starter data: police stations across major cities and a few sample lawyers."""
import logging

from app.core.security import hash_password

logger = logging.getLogger(__name__)

SAMPLE_PASSWORD = "password123"

POLICE_STATIONS = [
    {"name": "Connaught Place", "code": "DEL-001", "city": "delhi", "address": "Connaught Place, New Delhi", "phone": "+91-11-23341234", "email": "cp.delhi@police.gov.in"},
    {"name": "Karol Bagh", "code": "DEL-002", "city": "delhi", "address": "Karol Bagh, New Delhi", "phone": "+91-11-25753456", "email": "kb.delhi@police.gov.in"},
    {"name": "Bandra", "code": "MUM-001", "city": "mumbai", "address": "Bandra West, Mumbai", "phone": "+91-22-26421234", "email": "bandra.mumbai@police.gov.in"},
    {"name": "Andheri", "code": "MUM-002", "city": "mumbai", "address": "Andheri East, Mumbai", "phone": "+91-22-26851234", "email": "andheri.mumbai@police.gov.in"},
    {"name": "Pune City", "code": "PUN-001", "city": "pune", "address": "FC Road, Pune", "phone": "+91-20-26051234", "email": "pune.maharashtra@police.gov.in"},
    {"name": "Koramangala", "code": "BLR-001", "city": "bangalore", "address": "Koramangala, Bangalore", "phone": "+91-80-25531234", "email": "koramangala.bangalore@police.gov.in"},
    {"name": "Whitefield", "code": "BLR-002", "city": "bangalore", "address": "Whitefield, Bangalore", "phone": "+91-80-28451234", "email": "whitefield.bangalore@police.gov.in"},
    {"name": "T Nagar", "code": "CHN-001", "city": "chennai", "address": "T Nagar, Chennai", "phone": "+91-44-24331234", "email": "tnagar.chennai@police.gov.in"},
    {"name": "Cyberabad", "code": "HYD-001", "city": "hyderabad", "address": "Gachibowli, Hyderabad", "phone": "+91-40-27731234", "email": "cyberabad.hyderabad@police.gov.in"},
    {"name": "Park Street", "code": "KOL-001", "city": "kolkata", "address": "Park Street, Kolkata", "phone": "+91-33-22651234", "email": "parkstreet.kolkata@police.gov.in"},
    {"name": "Ellis Bridge", "code": "AHM-001", "city": "ahmedabad", "address": "Ellis Bridge, Ahmedabad", "phone": "+91-79-26581234", "email": "ellisbridge.ahmedabad@police.gov.in"},
    {"name": "Hazratganj", "code": "LUC-001", "city": "lucknow", "address": "Hazratganj, Lucknow", "phone": "+91-522-2651234", "email": "hazratganj.lucknow@police.gov.in"},
]

LAWYERS = [
    {
        "name": "Sarah Johnson",
        "email": "sarah.johnson@lawfirm.com",
        "phone": "+91-9876543210",
        "specialization": ["criminal", "fraud", "theft"],
        "city": "delhi",
        "experience": 12,
        "rating": 4.8,
        "stats": {"total_cases": 156, "won_cases": 132, "lost_cases": 24},
        "description": "Criminal law attorney with expertise in fraud and theft cases.",
    },
    {
        "name": "Michael Chen",
        "email": "michael.chen@lawfirm.com",
        "phone": "+91-9876543211",
        "specialization": ["corporate", "civil"],
        "city": "mumbai",
        "experience": 8,
        "rating": 4.6,
        "stats": {"total_cases": 89, "won_cases": 82, "lost_cases": 7},
        "description": "Corporate law specialist with focus on business disputes.",
    },
    {
        "name": "Priya Sharma",
        "email": "priya.sharma@lawfirm.com",
        "phone": "+91-9876543212",
        "specialization": ["civil", "murder"],
        "city": "bangalore",
        "experience": 15,
        "rating": 4.9,
        "stats": {"total_cases": 203, "won_cases": 178, "lost_cases": 25},
        "description": "Senior advocate handling civil disputes and serious criminal trials.",
    },
]


def seed_storage(storage) -> bool:
    """Populate an empty store. Returns False when users already exist."""
    if storage.count_users() > 0:
        logger.info("Storage already seeded")
        return False

    logger.info("Seeding storage...")
    existing_codes = {s.code for s in storage.list_police_stations()}
    for station in POLICE_STATIONS:
        if station["code"] not in existing_codes:
            storage.create_police_station(dict(station))

    password_hash = hash_password(SAMPLE_PASSWORD)
    for lawyer in LAWYERS:
        storage.create_user({**lawyer, "role": "lawyer", "password_hash": password_hash})

    logger.info("Seeded %d police stations and %d lawyers", len(POLICE_STATIONS), len(LAWYERS))
    return True
