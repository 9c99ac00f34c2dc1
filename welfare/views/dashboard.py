"""
Dashboard Views
===============

Counts and distributions over active (non-archived) seniors for the
dashboard charts
"""

from django.db.models import Count, Q
from django.http import JsonResponse
from django.views.decorators.http import require_http_methods

from welfare.permissions import api_login_required
from welfare.utils.category_helpers import REGULAR_CATEGORY, SPECIAL_ASSISTANCE_CATEGORY, parse_age


AGE_GROUPS = [
    ('60-65', 60, 65),
    ('66-70', 66, 70),
    ('71-75', 71, 75),
    ('76-80', 76, 80),
    ('81-85', 81, 85),
    ('85+', 86, 200),
]

CATEGORY_COLORS = {
    REGULAR_CATEGORY: '#22c55e',
    SPECIAL_ASSISTANCE_CATEGORY: '#ef4444',
}
DEFAULT_CATEGORY_COLOR = '#6b7280'


def build_age_distribution(seniors):
    """
    Male/female counts per age group

    Args:
        seniors: iterable of (age, gender) pairs; age may be stored text
    """
    distribution = {name: {'ageGroup': name, 'male': 0, 'female': 0} for name, _, _ in AGE_GROUPS}

    for age, gender in seniors:
        age = parse_age(age)
        if gender not in ('male', 'female'):
            continue
        for name, low, high in AGE_GROUPS:
            if low <= age <= high:
                distribution[name][gender] += 1
                break

    return [distribution[name] for name, _, _ in AGE_GROUPS]


# =============================================================================
# VIEWS
# =============================================================================

@require_http_methods(['GET'])
@api_login_required
def dashboard_stats(request):
    from welfare.models import Application, Senior

    stats = Senior.objects.get_queryset().get_statistics()

    return JsonResponse({
        'total_seniors': stats['total'],
        'total_applications': Application.objects.count(),
        'newly_registered': stats['newly_registered'],
        'pwd': stats['pwd'],
        'low_income': stats['low_income'],
        'regular': stats['regular'],
        'applied_for_benefits': stats['with_applications'],
        'released': stats['released'],
    })


@require_http_methods(['GET'])
@api_login_required
def age_distribution(request):
    from welfare.models import Senior

    rows = Senior.objects.values_list('age', 'gender')
    return JsonResponse({'data': build_age_distribution(rows)})


@require_http_methods(['GET'])
@api_login_required
def barangay_distribution(request):
    """Seniors, PWD and regular counts per barangay, largest first"""
    from welfare.models import Senior

    rows = (
        Senior.objects
        .values('barangay')
        .annotate(
            seniors=Count('id'),
            pwd=Count('id', filter=Q(pwd=True)),
            regular=Count('id', filter=Q(pwd=False)),
        )
        .order_by('-seniors', 'barangay')
    )
    return JsonResponse({'data': list(rows)})


@require_http_methods(['GET'])
@api_login_required
def category_distribution(request):
    """
    Regular seniors (neither PWD nor low income) plus the number of
    applications in every other category
    """
    from welfare.models import SeniorCategory, Senior

    categories = SeniorCategory.objects.annotate(
        value=Count('applications', filter=Q(applications__senior__deleted_at__isnull=True))
    )

    data = [{
        'name': 'Regular',
        'value': Senior.objects.get_queryset().regular().count(),
        'color': CATEGORY_COLORS[REGULAR_CATEGORY],
    }]
    for category in categories:
        if category.name == REGULAR_CATEGORY:
            continue
        data.append({
            'name': category.name,
            'value': category.value,
            'color': CATEGORY_COLORS.get(category.name, DEFAULT_CATEGORY_COLOR),
        })

    return JsonResponse({'data': data})
