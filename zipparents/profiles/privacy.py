"""Validation et confidentialité des profils."""
import re
from typing import Optional

from zipparents.models import ZIP_CODE_PATTERN, ProfileRecord, PublicProfile

_ZIP_CODE_RE = re.compile(ZIP_CODE_PATTERN)


def validate_zip_code(zip_code: Optional[str]) -> bool:
    """Valide un code postal US (exactement 5 chiffres)."""
    if not zip_code or not isinstance(zip_code, str):
        return False
    return bool(_ZIP_CODE_RE.match(zip_code.strip()))


def mask_zip_code(zip_code: str) -> str:
    """Garde les 3 premiers chiffres : "10001" -> "100XX"."""
    return zip_code[:3] + "XX"


def sanitize_profile_for_public(
    record: ProfileRecord, viewer_uid: Optional[str] = None
) -> PublicProfile:
    """
    Construit la vue publique d'un profil selon ses réglages de confidentialité.

    Args:
        record: Profil stocké
        viewer_uid: uid du parent qui consulte le profil

    Returns:
        PublicProfile: Profil nettoyé (code postal masqué, email et
        téléphone retirés si le propriétaire ne les partage pas)
    """
    is_own_profile = viewer_uid is not None and viewer_uid == record.uid

    public = PublicProfile(
        uid=record.uid,
        display_name=record.display_name,
        photo_url=record.photo_url,
        bio=record.bio,
        age_range=record.age_range,
        zip_code=record.zip_code,
        interests=list(record.interests),
        children_age_ranges=list(record.children_age_ranges),
        relationship_status=record.relationship_status,
        verification_status=record.verification_status,
        profile_completeness=record.profile_completeness,
        last_active=record.last_active,
        shows_exact_location=record.show_exact_location,
        is_public=record.profile_visibility == "public",
    )

    if not is_own_profile and not record.show_exact_location:
        public.zip_code = mask_zip_code(record.zip_code)

    if is_own_profile or record.show_email:
        public.email = record.email

    if is_own_profile or record.show_phone:
        public.phone_number = record.phone_number

    return public
