"""
Notification Views
==================
"""

from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from welfare.permissions import api_login_required
from welfare.utils.helpers import get_object_or_not_found
from welfare.views.base import handle_service_errors
from welfare.views.serializers import serialize_notification


@require_http_methods(['GET'])
@api_login_required
def notifications(request):
    """Latest notifications for the current user; ``?unread=true`` for unread only"""
    from welfare.models import Notification

    queryset = Notification.objects.for_user(request.user)
    if request.GET.get('unread', '').lower() == 'true':
        queryset = queryset.unread()

    return JsonResponse({
        'notifications': [serialize_notification(n) for n in queryset[:50]],
        'unread_count': Notification.objects.for_user(request.user).unread().count(),
    })


@require_http_methods(['POST'])
@api_login_required
@handle_service_errors
def notification_read(request, notification_id=None):
    """Mark one notification, or all of them, as read"""
    from welfare.models import Notification

    if notification_id is None:
        count = Notification.objects.mark_all_read(request.user)
        return JsonResponse({'msg': f'{count} notification(s) marked as read.'})

    notification = get_object_or_not_found(
        Notification.objects.for_user(request.user), notification_id, label="Notification"
    )
    notification.mark_as_read()
    return JsonResponse({'msg': 'Notification marked as read.'})
