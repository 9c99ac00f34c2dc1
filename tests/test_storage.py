import uuid
from unittest import mock

import cloudinary.exceptions
import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.utils.datastructures import MultiValueDict

from welfare.models import RegistrationDocument
from welfare.utils.storage import _requirement_id, safe_file_stem, save_senior_documents, upload_receipt


@pytest.mark.parametrize('name, expected', [
    ('scan.pdf', 'scan'),
    ('my birth cert (1).jpg', 'my_birth_cert__1_'),
    ('/tmp/uploads/id.photo.png', 'id.photo'),
    ('', 'file'),
    (None, 'file'),
])
def test_safe_file_stem(name, expected):
    assert safe_file_stem(name) == expected


class TestRequirementId:

    def test_plain_key(self):
        requirement = uuid.uuid4()
        assert _requirement_id(f'requirement_{requirement}') == requirement

    def test_key_for_senior(self):
        senior, requirement = uuid.uuid4(), uuid.uuid4()
        assert _requirement_id(f'requirement_{senior}_{requirement}', senior) == requirement

    def test_key_for_other_senior(self):
        requirement = uuid.uuid4()
        assert _requirement_id(f'requirement_{uuid.uuid4()}_{requirement}', uuid.uuid4()) is None

    def test_malformed(self):
        assert _requirement_id('requirement_abc') is None
        assert _requirement_id('requirement_a_b_c') is None


def upload(name):
    return SimpleUploadedFile(name, b'data')


@pytest.mark.django_db
class TestSaveSeniorDocuments:

    def test_registration_and_medical_files(self, make_senior, cloudinary_upload):
        senior = make_senior()
        files = MultiValueDict({
            'birth_certificate': [upload('birth.pdf'), upload('second.pdf')],
            'medical_assistance': [upload('rx1.jpg'), upload('rx2.jpg')],
            'unrelated': [upload('other.txt')],
        })

        saved, failed = save_senior_documents(senior, files)

        assert failed == []
        assert sorted(d.tag for d in saved) == ['birth_certificate', 'medical_assistance', 'medical_assistance']
        medical = [d for d in saved if d.tag == 'medical_assistance'][0]
        assert f'registration/documents/{senior.id}/medical_assistance/' in medical.public_id

    def test_requirement_files(self, make_senior, benefit, cloudinary_upload):
        senior = make_senior()
        requirement = benefit.requirements.get()
        files = {f'requirement_{requirement.id}': upload('cert.pdf')}

        saved, failed = save_senior_documents(senior, files)

        assert saved[0].benefit_requirement == requirement
        assert saved[0].tag == 'medical_assistance'

    def test_unknown_requirement_is_skipped(self, make_senior, cloudinary_upload):
        saved, failed = save_senior_documents(make_senior(), {f'requirement_{uuid.uuid4()}': upload('x.pdf')})

        assert saved == [] and failed == []
        cloudinary_upload.assert_not_called()

    def test_failed_upload_is_reported(self, make_senior):
        senior = make_senior()
        error = cloudinary.exceptions.Error('quota exceeded')

        with mock.patch('cloudinary.uploader.upload', side_effect=error):
            saved, failed = save_senior_documents(senior, {'id_photo': upload('me.png')})

        assert saved == []
        assert failed == ['me.png']
        assert not RegistrationDocument.objects.filter(senior=senior).exists()

    def test_nothing_to_save(self, make_senior):
        assert save_senior_documents(make_senior(), None) == ([], [])


def test_upload_receipt(cloudinary_upload):
    public_id, url = upload_receipt(upload('official receipt.jpg'))

    assert public_id.startswith('government-fund/receipts/receipt_')
    assert public_id.endswith('_official_receipt')
    assert url.startswith('https://')
