import logging
from dataclasses import dataclass, fields, replace
from decimal import Decimal
from typing import Dict, List, Tuple

from models.payroll import (
    PayrollInputs, PayrollResult, LineItem, LineKind, TaxBases, ZERO
)
from processors.tax_evaluator import evaluate_social_security, evaluate_income_tax
from config.tax_tables import PayrollConfig, CLT_2025
from utils.formatters import format_hours, format_percentage, format_days_ratio
from utils.validators import non_negative, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EarningRule:
    """Hour-based earning: hourly rate x multiplier x quantity"""
    code: str
    description: str
    quantity_field: str
    multiplier: Decimal


@dataclass(frozen=True)
class DsrRule:
    """Rest-day compensation over the sum of some earning rules"""
    code: str
    description: str
    source_codes: Tuple[str, ...]


@dataclass(frozen=True)
class DiscountRule:
    code: str
    description: str
    value_field: str


EARNING_RULES = (
    EarningRule('0526', 'ADICIONAL NOTURNO 20%', 'night_shift_hours', Decimal('0.20')),
    EarningRule('0650', 'HORAS EXTRAS 50%', 'overtime_50_hours', Decimal('1.50')),
    EarningRule('0660', 'H.E. NOTURNA 70%', 'night_overtime_70_hours', Decimal('2.04')),
    EarningRule('0670', 'DOM/FERIADO TRABALHADO', 'holiday_hours', Decimal('2.00')),
)

# Holiday work (0670) already includes the rest-day pay
DSR_RULES = (
    DsrRule('0692', 'DSR SOBRE HORAS EXTRAS', ('0650', '0660')),
    DsrRule('0694', 'DSR SOBRE ADIC. NOTURNO', ('0526',)),
)

DISCOUNT_RULES = (
    DiscountRule('0019', 'ADIANTAMENTO SALARIAL', 'advance'),
    DiscountRule('0600', 'PLANO DE SAÚDE', 'health_plan'),
    DiscountRule('0218', 'PLANO ODONTOLÓGICO', 'dental_plan'),
    DiscountRule('1096', 'VALE REFEIÇÃO/ALIM.', 'meal_benefit'),
    DiscountRule('1216', 'OUTROS DESCONTOS', 'other_discounts'),
)

BASE_SALARY_CODE = '0001'
SOCIAL_SECURITY_CODE = '0003'
INCOME_TAX_CODE = '0004'


def _earning(code: str, description: str, reference: str, amount: Decimal) -> LineItem:
    return LineItem(code, description, reference, amount, ZERO, LineKind.EARNING)


def _discount(code: str, description: str, reference: str, amount: Decimal, note=None) -> LineItem:
    return LineItem(code, description, reference, ZERO, amount, LineKind.DISCOUNT, note)


def _coerce(value, field_name: str):
    """Keep ints (day counts) as they are, anything else becomes Decimal"""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return to_decimal(value, field_name)


def sanitize_inputs(inputs: PayrollInputs) -> PayrollInputs:
    """Convert every field to Decimal/int and clamp negatives to zero"""
    clamped = {
        f.name: non_negative(_coerce(getattr(inputs, f.name), f.name), f.name)
        for f in fields(inputs)
    }
    return replace(inputs, **clamped)


def build_statement(inputs: PayrollInputs, config: PayrollConfig = CLT_2025) -> PayrollResult:
    """Assemble the itemized monthly statement.

    Order of the rows: base salary, hour-based earnings, DSR, INSS, IRRF and
    the manual discounts. Totals are summed over the emitted rows.
    """
    inputs = sanitize_inputs(inputs)

    divisor = inputs.divisor if inputs.divisor > 0 else config.standard_divisor
    hourly_rate = inputs.base_salary / divisor
    dsr_divisor = inputs.working_days if inputs.working_days > 0 else 1

    lines: List[LineItem] = [
        _earning(BASE_SALARY_CODE, 'SALÁRIO MENSALISTA', '30d', inputs.base_salary)
    ]

    # Hour-based earnings
    variable: Dict[str, Decimal] = {}
    for rule in EARNING_RULES:
        quantity = getattr(inputs, rule.quantity_field)
        if quantity > 0:
            value = hourly_rate * rule.multiplier * quantity
            variable[rule.code] = value
            lines.append(_earning(rule.code, rule.description, format_hours(quantity), value))

    # DSR
    for rule in DSR_RULES:
        total_variable = sum((variable.get(code, ZERO) for code in rule.source_codes), ZERO)
        if total_variable > 0 and inputs.rest_days > 0:
            value = total_variable / dsr_divisor * inputs.rest_days
            lines.append(_earning(
                rule.code, rule.description,
                format_days_ratio(inputs.rest_days, dsr_divisor), value
            ))

    gross_total = sum((line.earning for line in lines), ZERO)

    # INSS is always shown, even when zero
    inss = evaluate_social_security(gross_total, config.social_security_table)
    lines.append(_discount(
        SOCIAL_SECURITY_CODE, 'INSS SOBRE SALÁRIO',
        format_percentage(inss.nominal_rate), inss.amount,
        note=f"Efetiva: {format_percentage(inss.effective_rate)}" if inss.effective_rate > 0 else None
    ))

    irrf_base = gross_total - inss.amount
    irrf = evaluate_income_tax(
        irrf_base, inputs.dependents,
        config.income_tax_table, config.dependent_deduction
    )
    if irrf.amount > 0:
        lines.append(_discount(
            INCOME_TAX_CODE, 'IRRF SOBRE SALÁRIO',
            format_percentage(irrf.nominal_rate), irrf.amount,
            note=f"Efetiva: {format_percentage(irrf.effective_rate)}"
        ))

    for rule in DISCOUNT_RULES:
        value = getattr(inputs, rule.value_field)
        if value > 0:
            lines.append(_discount(rule.code, rule.description, '-', value))

    total_earnings = sum((line.earning for line in lines), ZERO)
    total_discounts = sum((line.discount for line in lines), ZERO)

    logger.debug(
        f"Statement built: {len(lines)} lines, gross {gross_total}, "
        f"INSS {inss.amount}, IRRF {irrf.amount}"
    )

    return PayrollResult(
        lines=tuple(lines),
        total_earnings=total_earnings,
        total_discounts=total_discounts,
        net_pay=total_earnings - total_discounts,
        # The advance does not reduce the FGTS base
        fgts=gross_total * config.fgts_rate,
        bases=TaxBases(
            social_security=min(gross_total, config.social_security_ceiling),
            income_tax=max(ZERO, irrf_base),
            severance_fund=gross_total
        )
    )
