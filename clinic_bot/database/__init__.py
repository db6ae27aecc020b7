"""
Knowledge store package exports.
"""

from clinic_bot.database.doctors import (
    DoctorRegistry,
    DEFAULT_DOCTOR_ID,
    SEED_DOCTORS,
)

__all__ = ["DoctorRegistry", "DEFAULT_DOCTOR_ID", "SEED_DOCTORS"]
