import logging
import openpyxl
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from pathlib import Path
from datetime import date
from typing import Optional
from models.payroll import PayrollResult, TaxTable
from config.settings import OUTPUT_DIR
from config.tax_tables import PayrollConfig, CLT_2025

logger = logging.getLogger(__name__)


class StatementExporter:
    """Write payroll statements to Excel files"""

    def __init__(self, output_dir: Optional[Path] = None, config: PayrollConfig = CLT_2025):
        self.output_dir = Path(output_dir) if output_dir else OUTPUT_DIR / "statements"
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.config = config

    def generate(self, result: PayrollResult, reference_month: str) -> str:
        """Generate statement Excel file"""

        # Create workbook
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = "Demonstrativo"

        # Set column widths
        ws.column_dimensions['A'].width = 10
        ws.column_dimensions['B'].width = 32
        ws.column_dimensions['C'].width = 12
        ws.column_dimensions['D'].width = 16
        ws.column_dimensions['E'].width = 16
        ws.column_dimensions['F'].width = 20

        # Define styles
        header_font = Font(bold=True, size=14)
        bold_font = Font(bold=True)
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )
        header_fill = PatternFill(start_color="D9E1F2", end_color="D9E1F2", fill_type="solid")

        # Header section
        row = 1
        ws.merge_cells(f'A{row}:F{row}')
        ws[f'A{row}'] = "DEMONSTRATIVO DE PAGAMENTO"
        ws[f'A{row}'].font = header_font
        ws[f'A{row}'].alignment = Alignment(horizontal='center')

        row = 2
        ws[f'A{row}'] = "Simulação CLT - Base 2025"
        ws[f'E{row}'] = "Referência"
        ws[f'F{row}'] = reference_month

        row = 3
        ws[f'E{row}'] = "Data Emissão"
        ws[f'F{row}'] = date.today().strftime('%d/%m/%Y')

        # Lines table
        row = 5
        headers = ['Cód.', 'Descrição', 'Ref.', 'Proventos', 'Descontos', 'Obs.']
        for col_idx, header in enumerate(headers, start=1):
            cell = ws.cell(row=row, column=col_idx)
            cell.value = header
            cell.font = bold_font
            cell.border = thin_border
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal='center')

        row += 1
        for line in result.lines:
            ws[f'A{row}'] = line.code
            ws[f'B{row}'] = line.description
            ws[f'C{row}'] = line.reference
            ws[f'D{row}'] = float(line.earning) if line.earning else ""
            ws[f'E{row}'] = float(line.discount) if line.discount else ""
            ws[f'F{row}'] = line.note or ""
            for col_idx in range(1, 7):
                ws.cell(row=row, column=col_idx).border = thin_border
            for col in ['D', 'E']:
                ws[f'{col}{row}'].number_format = '#,##0.00'
            row += 1

        # Totals
        ws[f'B{row}'] = "TOTAIS"
        ws[f'B{row}'].font = bold_font
        ws[f'D{row}'] = float(result.total_earnings)
        ws[f'E{row}'] = float(result.total_discounts)
        for col in ['D', 'E']:
            ws[f'{col}{row}'].number_format = '#,##0.00'
            ws[f'{col}{row}'].font = bold_font
        row += 2

        ws[f'B{row}'] = "VALOR LÍQUIDO"
        ws[f'B{row}'].font = Font(bold=True, size=14)
        ws[f'E{row}'] = float(result.net_pay)
        ws[f'E{row}'].font = Font(bold=True, size=14)
        ws[f'E{row}'].number_format = '#,##0.00'
        row += 2

        # Bases
        summary = [
            ("Base INSS", result.bases.social_security),
            ("Base IRRF", result.bases.income_tax),
            ("Base FGTS", result.bases.severance_fund),
            ("FGTS do mês", result.fgts),
        ]
        for label, value in summary:
            ws[f'A{row}'] = label
            ws[f'A{row}'].font = bold_font
            ws[f'C{row}'] = float(value)
            ws[f'C{row}'].number_format = '#,##0.00'
            row += 1

        self._write_tables(wb.create_sheet("Tabelas"), bold_font, thin_border)

        # Generate filename
        filename = f"statement_{reference_month}.xlsx"
        filepath = self.output_dir / filename

        # Save workbook
        wb.save(filepath)
        logger.info(f"Statement for {reference_month} exported to {filepath}")

        return str(filepath)

    def _write_tables(self, ws, bold_font: Font, thin_border: Border):
        """Reference INSS and IRRF tables"""
        ws.column_dimensions['A'].width = 22
        ws.column_dimensions['B'].width = 12
        ws.column_dimensions['C'].width = 14

        row = 1
        for table in (self.config.social_security_table, self.config.income_tax_table):
            row = self._write_table(ws, table, row, bold_font, thin_border) + 1

        ws[f'A{row}'] = "Dedução por dependente"
        ws[f'C{row}'] = float(self.config.dependent_deduction)
        ws[f'C{row}'].number_format = '#,##0.00'

    def _write_table(self, ws, table: TaxTable, row: int, bold_font: Font, thin_border: Border) -> int:
        ws[f'A{row}'] = table.name
        ws[f'A{row}'].font = bold_font
        row += 1

        for col_idx, header in enumerate(['Até', 'Alíquota', 'Dedução'], start=1):
            cell = ws.cell(row=row, column=col_idx)
            cell.value = header
            cell.font = bold_font
            cell.border = thin_border
        row += 1

        for bracket in table.brackets:
            ws[f'A{row}'] = "..." if bracket.is_unbounded else float(bracket.upper_bound)
            ws[f'B{row}'] = "Isento" if bracket.rate == 0 else f"{float(bracket.rate * 100):.1f}%".replace('.', ',')
            ws[f'C{row}'] = float(bracket.deduction) if bracket.deduction > 0 else "-"
            for col in ['A', 'C']:
                ws[f'{col}{row}'].number_format = '#,##0.00'
            for col_idx in range(1, 4):
                ws.cell(row=row, column=col_idx).border = thin_border
            row += 1

        return row
