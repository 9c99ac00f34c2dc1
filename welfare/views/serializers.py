"""
JSON Serialization
==================

Plain dicts for JsonResponse. Amounts are sent as floats.
"""


def _money(value):
    return float(value) if value is not None else 0.0


def _iso(value):
    return value.isoformat() if value else None


def serialize_document(document):
    requirement = document.benefit_requirement
    return {
        'id': str(document.id),
        'tag': document.tag,
        'file_name': document.file_name,
        'image_url': document.image_url,
        'public_id': document.public_id,
        'benefit_requirement': {
            'id': str(requirement.id),
            'name': requirement.name,
            'benefit': requirement.benefit.name,
        } if requirement else None,
    }


def serialize_application(application, include_senior=False):
    data = {
        'id': str(application.id),
        'benefit': {'id': str(application.benefit_id), 'name': application.benefit.name},
        'status': application.status.name,
        'category': application.category.name if application.category else None,
        'rejection_reason': application.rejection_reason,
        'created_at': _iso(application.created_at),
        'updated_at': _iso(application.updated_at),
    }
    if include_senior:
        senior = application.senior
        data['senior'] = {
            'id': str(senior.id),
            'full_name': senior.full_name,
            'age': senior.age,
            'barangay': senior.barangay,
            'pwd': senior.pwd,
        }
    return data


def serialize_senior(senior, include_related=True):
    data = {
        'id': str(senior.id),
        'firstname': senior.firstname,
        'middlename': senior.middlename,
        'lastname': senior.lastname,
        'full_name': senior.full_name,
        'email': senior.email,
        'age': senior.age,
        'birthdate': _iso(senior.birthdate),
        'gender': senior.gender,
        'barangay': senior.barangay,
        'purok': senior.purok,
        'contact_no': senior.contact_no,
        'emergency_no': senior.emergency_no,
        'contact_person': senior.contact_person,
        'contact_relationship': senior.contact_relationship,
        'pwd': senior.pwd,
        'low_income': senior.low_income,
        'remarks': senior.remarks.name if senior.remarks_id else None,
        'released_at': _iso(senior.released_at),
        'deleted_at': _iso(senior.deleted_at),
        'created_at': _iso(senior.created_at),
    }
    if include_related:
        data['documents'] = [serialize_document(d) for d in senior.documents.all()]
        data['applications'] = [serialize_application(a) for a in senior.applications.all()]
    return data


def serialize_fund_entry(entry):
    """A fund history row from welfare.utils.fund_ledger (dict)"""
    return {
        'id': str(entry['id']),
        'date': _iso(entry['date']),
        'amount': _money(entry['amount']),
        'source': entry.get('source'),
        'description': entry.get('description'),
        'receipt_url': entry.get('receipt_url'),
        'previous_balance': _money(entry.get('previous_balance')),
        'new_balance': _money(entry.get('new_balance')),
    }


def serialize_fund_summary(summary):
    return {key: _money(value) for key, value in summary.items()}


def serialize_transaction_row(row):
    return {
        **row,
        'date': _iso(row['date']),
        'amount': _money(row['amount']),
    }


def serialize_notification(notification):
    return {
        'id': str(notification.id),
        'type': notification.notification_type,
        'title': notification.title,
        'message': notification.message,
        'related_senior': str(notification.related_senior_id) if notification.related_senior_id else None,
        'related_application': (
            str(notification.related_application_id) if notification.related_application_id else None
        ),
        'is_read': notification.is_read,
        'read_at': _iso(notification.read_at),
        'created_at': _iso(notification.created_at),
    }
