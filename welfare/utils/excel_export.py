"""
Excel Export Utilities using Pandas
===================================

Spreadsheet exports for the government fund history and transactions
"""

from django.http import HttpResponse
from django.utils import timezone
import pandas as pd
from io import BytesIO
from datetime import datetime

from welfare.conf import welfare_settings


HEADER_COLOR = '1D4ED8'
TOTALS_COLOR = 'DBEAFE'
AMOUNT_FORMAT = '#,##0.00'


def create_excel_response(filename='report.xlsx'):
    """Create an HTTP response for Excel file download"""
    response = HttpResponse(
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def _format_date(value):
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            value = timezone.localtime(value)
        return value.strftime('%Y-%m-%d')
    if value is None:
        return ''
    return value.strftime('%Y-%m-%d') if hasattr(value, 'strftime') else str(value)


def _style_sheet(worksheet, df, amount_columns, widths, header_row=1):
    """Header fill, amount number format and column widths"""
    from openpyxl.styles import Font, PatternFill, Alignment
    from openpyxl.utils import get_column_letter

    header_fill = PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type='solid')
    header_font = Font(bold=True, color='FFFFFF', size=11)

    for col_num in range(1, len(df.columns) + 1):
        cell = worksheet.cell(row=header_row, column=col_num)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = Alignment(horizontal='center', vertical='center')

    for col_name in amount_columns:
        col_num = list(df.columns).index(col_name) + 1
        for row in range(header_row + 1, header_row + len(df) + 1):
            worksheet.cell(row=row, column=col_num).number_format = AMOUNT_FORMAT

    for col_num, width in enumerate(widths, 1):
        worksheet.column_dimensions[get_column_letter(col_num)].width = width


def _add_title(worksheet, title, subtitle, last_column):
    """Insert two title rows above the table"""
    from openpyxl.styles import Font, Alignment

    worksheet.insert_rows(1, 3)
    worksheet.merge_cells(f'A1:{last_column}1')
    worksheet.merge_cells(f'A2:{last_column}2')

    worksheet['A1'] = title
    worksheet['A1'].font = Font(bold=True, size=16, color=HEADER_COLOR)
    worksheet['A1'].alignment = Alignment(horizontal='center')

    worksheet['A2'] = subtitle
    worksheet['A2'].alignment = Alignment(horizontal='center')


def _period_label(start_date, end_date):
    if start_date and end_date:
        return f'Period: {start_date:%B %d, %Y} to {end_date:%B %d, %Y}'
    if start_date:
        return f'From {start_date:%B %d, %Y}'
    if end_date:
        return f'Up to {end_date:%B %d, %Y}'
    return f'All records as of {timezone.localdate():%B %d, %Y}'


def build_fund_history_workbook(report, start_date=None, end_date=None):
    """
    Fund history with running balances plus a summary sheet

    Args:
        report: dict from welfare.utils.fund_helpers.get_fund_history

    Returns:
        bytes: xlsx file content
    """
    symbol = welfare_settings.CURRENCY_SYMBOL
    output = BytesIO()
    writer = pd.ExcelWriter(output, engine='openpyxl')

    history_data = []
    for record in report['records']:
        history_data.append({
            'Date': _format_date(record['date']),
            'Source': record['source'],
            'Description': record.get('description') or '',
            f'Amount ({symbol})': float(record['amount']),
            f'Previous Balance ({symbol})': float(record['previous_balance']),
            f'New Balance ({symbol})': float(record['new_balance']),
        })

    columns = ['Date', 'Source', 'Description', f'Amount ({symbol})',
               f'Previous Balance ({symbol})', f'New Balance ({symbol})']
    df = pd.DataFrame(history_data, columns=columns)
    df.to_excel(writer, sheet_name='Fund History', index=False)

    summary = report['summary']
    df_summary = pd.DataFrame([
        {'Item': 'Total Fund Balance', f'Amount ({symbol})': float(summary['total_fund_balance'])},
        {'Item': 'Total Released', f'Amount ({symbol})': float(summary['total_released'])},
        {'Item': 'Total Pending', f'Amount ({symbol})': float(summary['total_pending'])},
        {'Item': 'Available Balance', f'Amount ({symbol})': float(summary['available_balance'])},
    ])
    df_summary.to_excel(writer, sheet_name='Summary', index=False)

    worksheet = writer.sheets['Fund History']
    _style_sheet(worksheet, df, columns[3:], [12, 30, 40, 16, 20, 20])
    _add_title(worksheet, 'GOVERNMENT FUND HISTORY', _period_label(start_date, end_date), 'F')

    _style_sheet(writer.sheets['Summary'], df_summary, [f'Amount ({symbol})'], [24, 20])

    writer.close()
    output.seek(0)
    return output.read()


def build_transactions_workbook(rows, start_date=None, end_date=None):
    """
    Transactions sheet with a totals row

    Returns:
        bytes: xlsx file content
    """
    from openpyxl.styles import Font, PatternFill

    symbol = welfare_settings.CURRENCY_SYMBOL
    output = BytesIO()
    writer = pd.ExcelWriter(output, engine='openpyxl')

    columns = ['Date', 'Type', 'Benefits', 'Category', 'Senior', 'Barangay', f'Amount ({symbol})']
    data = []
    for row in rows:
        data.append({
            'Date': _format_date(row['date']),
            'Type': str(row['type']).capitalize(),
            'Benefits': row['benefits'],
            'Category': row['category'],
            'Senior': row['senior_name'],
            'Barangay': row['barangay'],
            f'Amount ({symbol})': float(row['amount']),
        })

    df = pd.DataFrame(data, columns=columns)
    totals_row = pd.DataFrame([{
        'Date': '',
        'Type': 'TOTAL',
        f'Amount ({symbol})': float(sum(row['amount'] for row in rows)),
    }], columns=columns).fillna('')
    df = pd.concat([df, totals_row], ignore_index=True)
    df.to_excel(writer, sheet_name='Transactions', index=False)

    worksheet = writer.sheets['Transactions']
    _style_sheet(worksheet, df, [f'Amount ({symbol})'], [12, 12, 30, 28, 28, 20, 16])

    totals_fill = PatternFill(start_color=TOTALS_COLOR, end_color=TOTALS_COLOR, fill_type='solid')
    last_row = len(df) + 1
    for col_num in range(1, len(columns) + 1):
        cell = worksheet.cell(row=last_row, column=col_num)
        cell.fill = totals_fill
        cell.font = Font(bold=True, size=11)

    _add_title(worksheet, 'BENEFIT TRANSACTIONS', _period_label(start_date, end_date), 'G')

    writer.close()
    output.seek(0)
    return output.read()


def export_fund_history_excel(report, start_date=None, end_date=None):
    """Export government fund history to Excel"""
    filename = f'fund_history_{datetime.now().strftime("%Y%m%d")}.xlsx'
    response = create_excel_response(filename)
    response.write(build_fund_history_workbook(report, start_date, end_date))
    return response


def export_transactions_excel(rows, start_date=None, end_date=None):
    """Export benefit transactions to Excel"""
    filename = f'transactions_{datetime.now().strftime("%Y%m%d")}.xlsx'
    response = create_excel_response(filename)
    response.write(build_transactions_workbook(rows, start_date, end_date))
    return response
