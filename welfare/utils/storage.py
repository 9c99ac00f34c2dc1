"""
Cloudinary Document Storage
===========================

Uploads senior documents and fund receipts and records them.

Folder layout:
    registration/documents/<senior_id>[/<subfolder>]
    government-fund/receipts
"""

import logging
import os
import re
import time
import uuid

import cloudinary.exceptions
import cloudinary.uploader

logger = logging.getLogger(__name__)

REGISTRATION_FOLDER = 'registration/documents'
RECEIPT_FOLDER = 'government-fund/receipts'

# Single-file registration tags; medical_assistance accepts several files
REGISTRATION_FILE_TAGS = [
    'birth_certificate',
    'certificate_of_residency',
    'government_issued_id',
    'membership_certificate',
    'id_photo',
    'low_income',
]
MEDICAL_ASSISTANCE_TAG = 'medical_assistance'
REQUIREMENT_PREFIX = 'requirement_'


def safe_file_stem(file_name):
    """File name without extension, reduced to [A-Za-z0-9_.-]"""
    stem, _ext = os.path.splitext(os.path.basename(file_name or 'file'))
    return re.sub(r'[^a-zA-Z0-9_.-]', '_', stem) or 'file'


def upload_file(file, folder, public_id):
    """
    Upload a file object to Cloudinary

    Returns:
        dict: Cloudinary upload result (secure_url, public_id, ...)
    """
    return cloudinary.uploader.upload(
        file,
        folder=folder,
        public_id=public_id,
        resource_type='auto',
    )


def upload_and_save_document(file, senior, tag, subfolder=None, benefit_requirement=None):
    """
    Upload one document for a senior and record it as a RegistrationDocument

    Raises:
        cloudinary.exceptions.Error: If the upload fails
    """
    from welfare.models import RegistrationDocument

    folder = f"{REGISTRATION_FOLDER}/{senior.id}"
    if subfolder:
        folder = f"{folder}/{subfolder}"

    file_name = getattr(file, 'name', '') or 'file'
    public_id = f"{tag}_{senior.id}_{int(time.time() * 1000)}_{safe_file_stem(file_name)}"

    result = upload_file(file, folder, public_id)

    document = RegistrationDocument.objects.create(
        senior=senior,
        tag=tag,
        file=result.get('public_id'),
        public_id=result.get('public_id', ''),
        file_name=file_name,
        image_url=result.get('secure_url', ''),
        benefit_requirement=benefit_requirement,
    )
    logger.info(f"Uploaded {tag} document '{file_name}' for senior {senior.id}")
    return document


def _requirement_id(key, senior_id=None):
    """
    Parse requirement_<id> or requirement_<senior_id>_<id> file keys

    Returns None when the key belongs to another senior or is malformed.
    """
    parts = key[len(REQUIREMENT_PREFIX):].split('_')
    if len(parts) == 2:
        owner, requirement_id = parts
        if senior_id is not None and owner != str(senior_id):
            return None
    elif len(parts) == 1:
        requirement_id = parts[0]
    else:
        return None

    try:
        return uuid.UUID(requirement_id)
    except ValueError:
        return None


def save_senior_documents(senior, files):
    """
    Upload every document in a request's files for one senior

    Args:
        senior: Senior instance
        files: MultiValueDict (request.FILES) or a plain {key: file or [files]} dict

    Returns:
        tuple: (saved RegistrationDocument list, failed file name list)
    """
    from welfare.models import BenefitRequirement

    if not files:
        return [], []

    def getlist(key):
        if hasattr(files, 'getlist'):
            return files.getlist(key)
        value = files.get(key)
        if value is None:
            return []
        return value if isinstance(value, (list, tuple)) else [value]

    jobs = []
    for tag in REGISTRATION_FILE_TAGS:
        for file in getlist(tag)[:1]:
            jobs.append((file, tag, None, None))

    for file in getlist(MEDICAL_ASSISTANCE_TAG):
        jobs.append((file, MEDICAL_ASSISTANCE_TAG, MEDICAL_ASSISTANCE_TAG, None))

    for key in files.keys():
        if not key.startswith(REQUIREMENT_PREFIX):
            continue
        requirement_id = _requirement_id(key, senior.id)
        if requirement_id is None:
            continue
        requirement = BenefitRequirement.objects.filter(id=requirement_id).first()
        if requirement is None:
            logger.warning(f"Benefit requirement {requirement_id} not found; skipping '{key}'")
            continue
        for file in getlist(key):
            jobs.append((file, MEDICAL_ASSISTANCE_TAG, MEDICAL_ASSISTANCE_TAG, requirement))

    saved, failed = [], []
    for file, tag, subfolder, requirement in jobs:
        try:
            saved.append(upload_and_save_document(file, senior, tag, subfolder, requirement))
        except cloudinary.exceptions.Error as e:
            file_name = getattr(file, 'name', tag)
            logger.error(f"Upload of '{file_name}' ({tag}) for senior {senior.id} failed: {e}")
            failed.append(file_name)

    return saved, failed


def upload_receipt(file):
    """Upload a fund receipt; returns (public_id, secure_url)"""
    public_id = f"receipt_{int(time.time() * 1000)}_{safe_file_stem(getattr(file, 'name', ''))}"
    result = upload_file(file, RECEIPT_FOLDER, public_id)
    return result.get('public_id'), result.get('secure_url')
