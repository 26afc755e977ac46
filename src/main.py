import sys
import argparse
import logging
from pathlib import Path

# Project root holds the config package
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from config.settings import LOG_LEVEL
from processors.input_resolver import resolve_inputs
from processors.statement_builder import build_statement
from processors.statement_exporter import StatementExporter
from utils.formatters import format_number, format_currency

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# CLI flag -> payload field
OPTIONS = [
    ('--salary', 'base_salary', "Monthly base salary"),
    ('--divisor', 'divisor', "Hours divisor (default 220)"),
    ('--dependents', 'dependents', "Number of IRRF dependents"),
    ('--rest-days', 'rest_days', "Rest days, turns off automatic DSR days"),
    ('--night', 'night_shift_hours', "Night-shift hours (20%)"),
    ('--he50', 'overtime_50_hours', "Overtime hours at 50%"),
    ('--he70', 'night_overtime_70_hours', "Night overtime hours at 70%"),
    ('--holiday', 'holiday_hours', "Sunday/holiday hours worked"),
    ('--advance', 'advance', "Salary advance (default 40%% of salary)"),
    ('--health', 'health_plan', "Health plan"),
    ('--dental', 'dental_plan', "Dental plan"),
    ('--meal', 'meal_benefit', "Meal benefit"),
    ('--others', 'other_discounts', "Other discounts"),
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CLT payroll statement simulator")
    parser.add_argument('--month', dest='reference_month', help="Reference month (YYYY-MM)")
    for flag, field_name, help_text in OPTIONS:
        parser.add_argument(flag, dest=field_name, help=help_text)
    parser.add_argument('--export', action='store_true', help="Also write the statement to Excel")
    return parser


def print_statement(resolved, result):
    print("=" * 92)
    print(f"DEMONSTRATIVO DE PAGAMENTO - {resolved.reference_month}")
    print(f"Dias úteis: {resolved.inputs.working_days}   DSR: {resolved.inputs.rest_days}")
    print("=" * 92)
    print(f"{'Cód.':<6}{'Descrição':<28}{'Ref.':>10}{'Proventos':>16}{'Descontos':>16}  Obs.")
    print("-" * 92)
    for line in result.lines:
        earning = format_number(line.earning) if line.earning else ""
        discount = format_number(line.discount) if line.discount else ""
        print(f"{line.code:<6}{line.description:<28}{line.reference:>10}{earning:>16}{discount:>16}  {line.note or ''}")
    print("-" * 92)
    print(f"{'TOTAIS':<44}{format_number(result.total_earnings):>16}{format_number(result.total_discounts):>16}")
    print(f"\nValor líquido: {format_currency(result.net_pay)}")
    print(f"Base INSS: {format_currency(result.bases.social_security)}   "
          f"Base IRRF: {format_currency(result.bases.income_tax)}   "
          f"Base FGTS: {format_currency(result.bases.severance_fund)}")
    print(f"FGTS do mês: {format_currency(result.fgts)}")
    print("=" * 92)


def main(argv=None):
    """Main entry point for the payroll simulator"""
    args = build_parser().parse_args(argv)

    payload = {k: v for k, v in vars(args).items() if v is not None and k != 'export'}
    if 'rest_days' in payload:
        payload['auto_dsr'] = False

    try:
        resolved = resolve_inputs(payload)
    except ValueError as e:
        logger.error(str(e))
        return 2

    logger.info(f"Computing statement for {resolved.reference_month}")
    result = build_statement(resolved.inputs)
    print_statement(resolved, result)

    if args.export:
        filepath = StatementExporter().generate(result, resolved.reference_month)
        print(f"\nStatement saved to: {filepath}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
