"""
Application Views
=================

Benefit applications, their status workflow and the category lookup
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from welfare.forms import ApplicationForm, ApplicationSearchForm, ApplicationStatusForm
from welfare.permissions import PermissionChecker, api_login_required, permission_required
from welfare.utils.application_helpers import apply_for_benefit, list_applications, update_application_status
from welfare.views.base import form_error_response, handle_service_errors, json_error, parse_request_data
from welfare.views.serializers import serialize_application, serialize_document


@require_http_methods(['GET', 'POST'])
@api_login_required
@handle_service_errors
def applications(request):
    """
    GET  - name, appliedBenefit, seniorCategory, status (comma-separated lists)
    POST - benefit_id + selected_senior_ids, requirement files as
           requirement_<senior_id>_<requirement_id>
    """
    if request.method == 'POST':
        if not PermissionChecker(request.user).can_apply_for_benefits():
            return json_error('You do not have permission to file applications.', 'permission_denied', 403)

        form = ApplicationForm(parse_request_data(request))
        if not form.is_valid():
            return form_error_response(form)

        result = apply_for_benefit(
            form.cleaned_data['benefit_id'],
            form.cleaned_data['selected_senior_ids'],
            documents=request.FILES,
            created_by=request.user,
        )
        return JsonResponse({
            'msg': 'Application submitted successfully.',
            'applications': [str(application.id) for application in result['applications']],
            'documents': [serialize_document(document) for document in result['documents']],
            'failed_uploads': result['failed_uploads'],
        }, status=201)

    form = ApplicationSearchForm(request.GET)
    if not form.is_valid():
        return form_error_response(form)

    data = form.cleaned_data
    queryset = list_applications(
        name=data.get('name'),
        applied_benefit=data.get('appliedBenefit'),
        senior_category=data.get('seniorCategory'),
        status=data.get('status'),
    )
    results = [serialize_application(application, include_senior=True) for application in queryset]

    return JsonResponse({'applications': results, 'count': len(results)})


@require_http_methods(['PUT', 'POST'])
@permission_required('can_change_application_status')
@handle_service_errors
def application_status(request, application_id):
    form = ApplicationStatusForm(parse_request_data(request))
    if not form.is_valid():
        return form_error_response(form)

    application = update_application_status(
        application_id,
        form.cleaned_data['status'],
        rejection_reason=form.cleaned_data['rejection_reason'],
        updated_by=request.user,
    )
    return JsonResponse({
        'msg': 'Application status updated.',
        'application': serialize_application(application),
    })


@require_http_methods(['GET'])
@api_login_required
def categories(request):
    from welfare.models import SeniorCategory

    return JsonResponse({
        'categories': [
            {'id': str(category.id), 'name': category.name, 'order': category.order}
            for category in SeniorCategory.objects.all()
        ]
    })
