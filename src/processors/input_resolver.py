from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

from models.payroll import PayrollInputs, CalendarFacts
from config.tax_tables import PayrollConfig, CLT_2025
from utils.validators import to_decimal, to_int
from utils.work_calendar import count_calendar_facts

CENT = Decimal('0.01')

HOUR_FIELDS = ('night_shift_hours', 'overtime_50_hours', 'night_overtime_70_hours', 'holiday_hours')
DISCOUNT_FIELDS = ('health_plan', 'dental_plan', 'meal_benefit', 'other_discounts')


@dataclass(frozen=True)
class ResolvedRequest:
    """Inputs ready for the statement builder, with the month they came from"""
    reference_month: str
    auto_dsr: bool
    calendar: CalendarFacts
    inputs: PayrollInputs


def _flag(value: Any, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def default_advance(base_salary: Decimal, config: PayrollConfig = CLT_2025) -> Decimal:
    """Salary advance suggested for a base salary (40% by default)"""
    return (base_salary * config.advance_rate).quantize(CENT, rounding=ROUND_HALF_UP)


def resolve_inputs(payload: Dict[str, Any],
                   config: PayrollConfig = CLT_2025,
                   today: Optional[date] = None) -> ResolvedRequest:
    """Turn a raw form payload into PayrollInputs.

    With ``auto_dsr`` (default) rest and working days come from the calendar.
    Otherwise ``rest_days`` is taken from the payload and working days are
    derived from the month length, never kept as an independent value.
    """
    today = today or date.today()
    reference_month = payload.get('reference_month') or today.strftime('%Y-%m')
    facts = count_calendar_facts(reference_month, config.fixed_holidays)

    auto_dsr = _flag(payload.get('auto_dsr'), True)
    if auto_dsr:
        rest_days = facts.rest_days
        working_days = facts.working_days
    else:
        rest_days = max(to_int(payload.get('rest_days'), 'rest_days'), 0)
        working_days = max(1, facts.total_days - rest_days)

    base_salary = to_decimal(payload.get('base_salary'), 'base_salary')

    divisor = payload.get('divisor')
    divisor = config.standard_divisor if divisor in (None, '') else to_decimal(divisor, 'divisor')

    if payload.get('advance') in (None, ''):
        advance = default_advance(base_salary, config)
    else:
        advance = to_decimal(payload['advance'], 'advance')

    values = {name: to_decimal(payload.get(name), name) for name in HOUR_FIELDS + DISCOUNT_FIELDS}

    inputs = PayrollInputs(
        base_salary=base_salary,
        divisor=divisor,
        rest_days=rest_days,
        working_days=working_days,
        dependents=to_int(payload.get('dependents'), 'dependents'),
        advance=advance,
        **values
    )

    return ResolvedRequest(
        reference_month=facts.year_month,
        auto_dsr=auto_dsr,
        calendar=facts,
        inputs=inputs
    )
