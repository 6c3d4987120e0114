"""
Packing-list storage. Files live under the PACKING_LIST_NAMESPACE prefix of
Django's default storage; reservations keep only the returned reference.

Public API:
  validate_packing_list(upload)
  store_packing_list(upload, user_id)   -> reference
  discard_packing_list(reference)
  open_packing_list(reference)          -> (bytes, filename, content_type)
"""
import logging
import os
import posixpath
import time

from django.conf import settings
from django.core.exceptions import SuspiciousFileOperation
from django.core.files.storage import default_storage

from apps.core.exceptions import InvalidAttachmentError, NotFoundError

logger = logging.getLogger(__name__)

CONTENT_TYPES = {
    '.pdf':  'application/pdf',
    '.doc':  'application/msword',
    '.docx': 'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
}
DEFAULT_CONTENT_TYPE = 'application/octet-stream'


def content_type_for(filename: str) -> str:
    ext = os.path.splitext(filename)[1].lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


def validate_packing_list(upload) -> None:
    """Raise InvalidAttachmentError unless the upload is present, small enough and a PDF/DOC/DOCX."""
    if upload is None:
        raise InvalidAttachmentError('A packing list file is required.')
    if upload.size > settings.PACKING_LIST_MAX_BYTES:
        raise InvalidAttachmentError('The packing list must not exceed 10 MB.')
    ext = os.path.splitext(upload.name or '')[1].lower()
    if ext not in settings.PACKING_LIST_EXTENSIONS:
        raise InvalidAttachmentError('The packing list must be a PDF, DOC or DOCX file.')


def store_packing_list(upload, user_id) -> str:
    """Persist the upload under a server-chosen name and return its reference."""
    ext = os.path.splitext(upload.name)[1].lower()
    name = f"{settings.PACKING_LIST_NAMESPACE}/packing_{user_id}_{int(time.time() * 1000)}{ext}"
    reference = default_storage.save(name, upload)
    logger.info('Stored packing list %s (%d bytes)', reference, upload.size)
    return reference


def discard_packing_list(reference: str) -> None:
    """Remove a stored file whose reservation was never written."""
    default_storage.delete(reference)
    logger.info('Discarded packing list %s', reference)


def _check_reference(reference: str) -> None:
    prefix = f"{settings.PACKING_LIST_NAMESPACE}/"
    if not reference or '\\' in reference or not reference.startswith(prefix):
        raise InvalidAttachmentError('Invalid file path.')
    if posixpath.normpath(reference) != reference:
        raise InvalidAttachmentError('Invalid file path.')


def open_packing_list(reference: str):
    """Read a stored packing list back, with a content type inferred from its extension."""
    _check_reference(reference)
    try:
        if not default_storage.exists(reference):
            raise NotFoundError('File not found.')
        with default_storage.open(reference, 'rb') as fh:
            data = fh.read()
    except SuspiciousFileOperation as exc:
        raise InvalidAttachmentError('Invalid file path.') from exc
    filename = posixpath.basename(reference)
    return data, filename, content_type_for(filename)
