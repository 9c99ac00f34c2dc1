from io import BytesIO
from unittest import mock

import pytest
from django.http import HttpResponse
from django.template.loader import render_to_string
from django.urls import reverse
from openpyxl import load_workbook


pytestmark = pytest.mark.django_db


def test_fund_history_excel(staff_client, fund_with_history):
    response = staff_client.get(reverse('welfare:fund_history_excel'), {'startDate': '2025-06-01'})

    assert response.status_code == 200
    sheet = load_workbook(BytesIO(response.content))['Fund History']
    assert sheet['B5'].value == 'Municipal allocation'
    assert sheet['E5'].value == 60000
    assert sheet['F5'].value == 100000


def test_transactions_excel_bad_range(staff_client):
    response = staff_client.get(reverse('welfare:transactions_excel'), {'startDate': '2025-06-02', 'endDate': '2025-06-01'})
    assert response.status_code == 400


def test_reports_need_login(client):
    assert client.get(reverse('welfare:released_seniors_pdf')).status_code == 401


def test_government_fund_pdf_context(staff_client, fund_with_history):
    with mock.patch('welfare.utils.pdf_export.render_to_pdf', return_value=HttpResponse(b'%PDF')) as render:
        response = staff_client.get(reverse('welfare:government_fund_pdf'))

    assert response.content == b'%PDF'
    template_name, context, filename = render.call_args.args
    assert template_name == 'reports/government_fund_pdf.html'
    assert context['summary_display']['total_fund_balance'] == '₱100,000.00'
    assert len(context['records']) == 2
    assert filename.startswith('government_fund_')


def test_government_fund_template_renders(fund_with_history):
    from welfare.utils.fund_helpers import get_fund_history
    from welfare.utils.money import format_currency

    report = get_fund_history()
    html = render_to_string('reports/government_fund_pdf.html', {
        'report_type': 'Government Fund Report',
        'summary': report['summary'],
        'summary_display': {key: format_currency(value) for key, value in report['summary'].items()},
        'records': report['records'],
        'transactions': [],
    })

    assert 'Provincial allocation' in html
    assert '₱100,000.00' in html


def test_released_seniors_template_renders(make_senior):
    from welfare.utils.senior_helpers import release_senior

    senior = release_senior(make_senior(firstname='Rosario').id)
    html = render_to_string('reports/released_seniors_pdf.html', {'seniors': [senior], 'total': 1})

    assert 'Rosario' in html
