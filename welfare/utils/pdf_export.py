"""
Printable Reports (WeasyPrint)
==============================

Government fund and released-seniors reports rendered from Django templates
"""

from django.template.loader import render_to_string
from django.http import HttpResponse
from django.utils import timezone
import logging

from welfare.utils.money import format_currency

logger = logging.getLogger(__name__)


REPORT_CSS = '''
    @page {
        size: A4;
        margin: 2cm 1.5cm;

        @top-center {
            content: "Senior Citizens Welfare Office";
            font-size: 10pt;
            color: #6B7280;
        }

        @bottom-right {
            content: counter(page) " / " counter(pages);
            font-size: 9pt;
            color: #6B7280;
        }
    }

    body {
        font-family: 'DejaVu Sans', 'Helvetica', sans-serif;
        font-size: 10pt;
        line-height: 1.4;
        color: #1F2937;
    }

    table {
        width: 100%;
        border-collapse: collapse;
        margin-bottom: 1rem;
    }

    thead {
        display: table-header-group;
    }

    tr {
        page-break-inside: avoid;
    }

    th {
        background-color: #DBEAFE;
        border-bottom: 2px solid #93C5FD;
        padding: 6px 10px;
        text-align: left;
        font-size: 9pt;
        letter-spacing: 0.03em;
    }

    td {
        border-bottom: 1px solid #E2E8F0;
        padding: 5px 10px;
    }

    .text-right {
        text-align: right;
    }

    .header-section {
        margin-bottom: 1.5rem;
        padding-bottom: 1rem;
        border-bottom: 2px solid #1D4ED8;
    }

    .report-title {
        font-size: 18pt;
        font-weight: 700;
        color: #1D4ED8;
    }

    .report-subtitle {
        font-size: 11pt;
        color: #6B7280;
    }

    .summary-box {
        background-color: #EFF6FF;
        border-left: 4px solid #1D4ED8;
        padding: 1rem;
        margin: 1rem 0;
    }

    .alert-box {
        background-color: #FEF2F2;
        border-left: 4px solid #B91C1C;
        padding: 1rem;
        margin: 1rem 0;
    }
'''


def render_to_pdf(template_name, context, filename='report.pdf'):
    """
    Render a report template and return it as a PDF attachment

    WeasyPrint needs system libraries (Pango); where they are missing the
    response is a 503 text body instead of an exception.
    """
    try:
        from weasyprint import HTML, CSS
        from weasyprint.text.fonts import FontConfiguration
    except (ImportError, OSError) as e:
        logger.error(f"PDF generation unavailable: {e}")
        return HttpResponse(
            f"PDF generation is not available in this environment. Error: {str(e)}",
            status=503,
            content_type='text/plain'
        )

    font_config = FontConfiguration()
    document = HTML(string=render_to_string(template_name, context))
    pdf_bytes = document.write_pdf(
        stylesheets=[CSS(string=REPORT_CSS, font_config=font_config)],
        font_config=font_config,
    )

    response = HttpResponse(pdf_bytes, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def generate_government_fund_pdf(report, transactions, start_date=None, end_date=None):
    """Government fund summary, fund history and transactions"""
    context = {
        'report_type': 'Government Fund Report',
        'summary': report['summary'],
        'records': report['records'],
        'reconciled_mode': report.get('reconciled_mode'),
        'transactions': transactions,
        'start_date': start_date,
        'end_date': end_date,
        'summary_display': {key: format_currency(value) for key, value in report['summary'].items()},
        'generated_at': timezone.localtime(),
    }

    filename = f'government_fund_{timezone.localdate():%Y%m%d}.pdf'
    return render_to_pdf('reports/government_fund_pdf.html', context, filename)


def generate_released_seniors_pdf(seniors):
    """List of seniors whose benefit has been released"""
    context = {
        'report_type': 'Released Seniors Report',
        'seniors': seniors,
        'total': len(seniors),
        'generated_at': timezone.localtime(),
    }

    filename = f'released_seniors_{timezone.localdate():%Y%m%d}.pdf'
    return render_to_pdf('reports/released_seniors_pdf.html', context, filename)
