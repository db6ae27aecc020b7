"""
In-memory doctor registry.
Profiles are seeded at import time and never mutated afterwards.
"""

from types import MappingProxyType
from typing import Iterable, Mapping

from clinic_bot.models.domain import DoctorProfile
from clinic_bot.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_DOCTOR_ID = "dr_pranjal"

SEED_DOCTORS: tuple[DoctorProfile, ...] = (
    DoctorProfile(
        id="dr_pranjal",
        name="Dr. Pranjal",
        specialty="General Dentist",
        image_url="/drpic.jpg",
        short_bio=(
            "Friendly general dentist focused on patient comfort, "
            "preventive care, and painless treatments."
        ),
    ),
)


class DoctorRegistry:
    """
    Read-only lookup of doctor profiles by id.
    Lookups through ``resolve`` never fail; misses fall back to the default doctor.
    """

    def __init__(
        self,
        doctors: Iterable[DoctorProfile] = SEED_DOCTORS,
        default_id: str = DEFAULT_DOCTOR_ID,
    ):
        """
        Initialize registry.

        Args:
            doctors: Profiles to serve
            default_id: Id returned when a lookup misses

        Raises:
            ValueError: If the default id is not among the profiles
        """
        self._doctors: Mapping[str, DoctorProfile] = MappingProxyType(
            {doc.id: doc for doc in doctors}
        )
        if default_id not in self._doctors:
            raise ValueError(f"Default doctor '{default_id}' is not registered")
        self.default_id = default_id

    @property
    def default(self) -> DoctorProfile:
        return self._doctors[self.default_id]

    def get(self, doctor_id: str | None) -> DoctorProfile | None:
        """Returns the profile for ``doctor_id`` or None."""
        if not doctor_id:
            return None
        return self._doctors.get(doctor_id)

    def resolve(self, doctor_id: str | None) -> DoctorProfile:
        """
        Returns the profile for ``doctor_id``, or the default profile on a miss.

        Args:
            doctor_id: Requested id, may be empty or unknown

        Returns:
            A registered DoctorProfile
        """
        doctor = self.get(doctor_id)
        if doctor is None:
            if doctor_id:
                logger.warning(
                    "doctor_not_found",
                    doctor_id=doctor_id,
                    fallback=self.default_id,
                )
            return self.default
        return doctor

    def __contains__(self, doctor_id: object) -> bool:
        return doctor_id in self._doctors

    def __len__(self) -> int:
        return len(self._doctors)
