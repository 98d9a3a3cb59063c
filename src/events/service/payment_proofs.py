"""Private storage for bank transfer and PayID payment proofs.

Proofs are images uploaded by registrants before they submit a registration.
They live below ``protected/`` and can only be viewed through signed URLs
handed out to admins.
"""

import re
import uuid
from pathlib import PurePosixPath

import structlog
from django.conf import settings
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import UploadedFile
from django.utils.translation import gettext_lazy as _
from ninja.errors import HttpError

from common.signing import PROTECTED_PATH_PREFIX, clamp_expires_in, generate_signed_url, is_protected_path

logger = structlog.get_logger(__name__)

EVENT_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")
DEFAULT_EXTENSION = "jpg"


def proof_directory(event_id: str) -> str:
    return f"{PROTECTED_PATH_PREFIX}payment-proofs/event-registrations/{event_id}"


def is_event_proof(path: str, event_id: str) -> bool:
    """Whether ``path`` names a file inside the proof directory of ``event_id``."""
    parts = PurePosixPath(path).parts
    return ".." not in parts and path.startswith(f"{proof_directory(event_id)}/")


def _extension(filename: str | None) -> str:
    suffix = PurePosixPath(filename or "").suffix.lower().lstrip(".")
    return suffix or DEFAULT_EXTENSION


def store_payment_proof(event_id: str | None, upload: UploadedFile | None) -> str:
    """Save an uploaded proof image and return its storage path.

    Raises:
        HttpError: 400 for a missing or malformed event id, a missing file or a non-image file;
            413 when the file exceeds ``PAYMENT_PROOF_MAX_BYTES``.
    """
    if not event_id:
        raise HttpError(400, str(_("Missing eventId")))
    if not EVENT_ID_RE.match(event_id):
        raise HttpError(400, str(_("Invalid eventId")))
    if upload is None:
        raise HttpError(400, str(_("Missing file")))
    if not (upload.content_type or "").startswith("image/"):
        raise HttpError(400, str(_("Invalid file type")))
    if upload.size is not None and upload.size > settings.PAYMENT_PROOF_MAX_BYTES:
        raise HttpError(413, str(_("File too large")))

    path = f"{proof_directory(event_id)}/{uuid.uuid4()}.{_extension(upload.name)}"
    stored_path = default_storage.save(path, upload)
    logger.info("payment_proof_stored", event_id=event_id, path=stored_path, size=upload.size)
    return stored_path


def signed_proof_url(path: str | None, expires_in: int | None = None) -> str:
    """A signed, expiring URL for a stored proof.

    Raises:
        HttpError: 400 when the path is missing or outside the protected area.
    """
    if not path:
        raise HttpError(400, str(_("Missing path")))
    path = path.lstrip("/")
    if not is_protected_path(path) or ".." in PurePosixPath(path).parts:
        raise HttpError(400, str(_("Invalid path")))
    return generate_signed_url(path, expires_in=clamp_expires_in(expires_in))
