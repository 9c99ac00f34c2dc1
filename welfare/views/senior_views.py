"""
Senior Views
============

Registration, updates, archive and benefit release
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods
import logging

from welfare.forms import SeniorForm, SeniorReleaseForm, SeniorSearchForm, SeniorUpdateForm
from welfare.permissions import PermissionChecker, api_login_required, permission_required
from welfare.utils.helpers import get_object_or_not_found
from welfare.utils.senior_helpers import (
    create_senior,
    list_archived_seniors,
    list_seniors,
    permanent_delete_senior,
    refresh_senior_age,
    release_senior,
    restore_senior,
    soft_delete_senior,
    update_senior,
)
from welfare.views.base import form_error_response, handle_service_errors, json_error, parse_request_data
from welfare.views.serializers import serialize_document, serialize_senior

logger = logging.getLogger(__name__)


# =============================================================================
# LIST / CREATE
# =============================================================================

@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_service_errors
def seniors(request):
    """
    GET  - active seniors (name, gender, purok, barangay, remarks, releaseStatus)
    POST - register a senior with documents
    """
    if request.method == 'POST':
        return _create_senior(request)

    form = SeniorSearchForm(request.GET)
    if not form.is_valid():
        return form_error_response(form)

    data = form.cleaned_data
    results = list_seniors(
        name=data.get('name'),
        gender=data.get('gender'),
        purok=data.get('purok'),
        barangay=data.get('barangay'),
        remarks=data.get('remarks'),
        release_status=data.get('releaseStatus'),
    )

    return JsonResponse({
        'seniors': [serialize_senior(senior) for senior in results],
        'count': len(results),
    })


def _create_senior(request):
    if not PermissionChecker(request.user).can_register_seniors():
        return json_error('You do not have permission to register seniors.', 'permission_denied', 403)

    form = SeniorForm(parse_request_data(request))
    if not form.is_valid():
        return form_error_response(form)

    result = create_senior(form.cleaned_data, documents=request.FILES, created_by=request.user)

    return JsonResponse({
        'msg': 'Senior registered successfully.',
        'senior': serialize_senior(result['senior'], include_related=False),
        'documents': [serialize_document(document) for document in result['documents']],
        'failed_uploads': result['failed_uploads'],
    }, status=201)


# =============================================================================
# DETAIL / UPDATE
# =============================================================================

@require_http_methods(['GET', 'PUT', 'PATCH'])
@api_login_required
@handle_service_errors
def senior_detail(request, senior_id):
    from welfare.models import Senior

    if request.method in ('PUT', 'PATCH'):
        if not PermissionChecker(request.user).can_edit_seniors():
            return json_error('You do not have permission to edit seniors.', 'permission_denied', 403)

        form = SeniorUpdateForm(parse_request_data(request))
        if not form.is_valid():
            return form_error_response(form)

        result = update_senior(senior_id, form.payload)
        body = {
            'msg': 'Senior updated successfully.',
            'senior': serialize_senior(result['senior'], include_related=False),
            'applications_updated': result['applications_updated'],
        }
        if result['category_error']:
            body['category_error'] = result['category_error']
        return JsonResponse(body)

    senior = get_object_or_not_found(
        Senior.objects.select_related('remarks').prefetch_related(
            'documents__benefit_requirement__benefit',
            'applications__benefit',
            'applications__status',
            'applications__category',
        ),
        senior_id,
        label="Senior"
    )
    refresh_senior_age(senior)
    return JsonResponse({'senior': serialize_senior(senior)})


# =============================================================================
# ARCHIVE
# =============================================================================

@require_http_methods(['DELETE', 'POST'])
@permission_required('can_archive_seniors')
@handle_service_errors
def senior_delete(request, senior_id):
    """Archive a senior; ``?permanent=true`` deletes for good (admin)"""
    if request.GET.get('permanent', '').lower() == 'true':
        if not PermissionChecker(request.user).can_manage_archive():
            return json_error('Only administrators can permanently delete seniors.', 'permission_denied', 403)
        permanent_delete_senior(senior_id)
        return JsonResponse({'msg': 'Senior permanently deleted.'})

    soft_delete_senior(senior_id)
    return JsonResponse({'msg': 'Senior archived successfully.'})


@require_http_methods(['POST'])
@permission_required('can_manage_archive')
@handle_service_errors
def senior_restore(request, senior_id):
    senior = restore_senior(senior_id)
    return JsonResponse({
        'msg': 'Senior restored successfully.',
        'senior': serialize_senior(senior, include_related=False),
    })


@require_http_methods(['GET'])
@api_login_required
@handle_service_errors
def archived_seniors(request):
    results = list_archived_seniors(name=request.GET.get('name'))
    return JsonResponse({
        'seniors': [serialize_senior(senior, include_related=False) for senior in results],
        'count': len(results),
    })


# =============================================================================
# RELEASE
# =============================================================================

@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_service_errors
def senior_release(request):
    """
    GET  - seniors whose benefit is released or scheduled
    POST - schedule a release for ``senior_id`` (admin)
    """
    if request.method == 'POST':
        if not PermissionChecker(request.user).can_release_benefits():
            return json_error('Only administrators can release benefits.', 'permission_denied', 403)

        form = SeniorReleaseForm(parse_request_data(request))
        if not form.is_valid():
            return form_error_response(form)

        senior = release_senior(form.cleaned_data['senior_id'], released_by=request.user)
        return JsonResponse({
            'msg': 'Senior released successfully.',
            'senior': serialize_senior(senior, include_related=False),
        })

    from welfare.models import Senior

    released = Senior.objects.released().select_related('remarks').order_by('-released_at')
    return JsonResponse({
        'seniors': [serialize_senior(senior, include_related=False) for senior in released],
        'count': released.count(),
    })
