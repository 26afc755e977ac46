import sys
from pathlib import Path
from datetime import date
from decimal import Decimal

import pytest

# Add project root and src to path
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))
sys.path.insert(0, str(ROOT / 'src'))

from utils.work_calendar import count_calendar_facts
from utils.formatters import format_currency, format_number, format_percentage, format_hours
from utils.validators import to_decimal, parse_year_month
from processors.input_resolver import resolve_inputs, default_advance

# ============================================================================
# Calendar
# ============================================================================

def test_holiday_on_sunday_counted_once():
    # 12/10/2025 (Aparecida) is a Sunday
    facts = count_calendar_facts('2025-10')

    assert facts.total_days == 31
    assert facts.rest_days == 4
    assert facts.working_days == 27
    assert facts.holidays == ()


def test_weekday_holiday_counted():
    # Christmas 2025 is a Thursday
    facts = count_calendar_facts('2025-12')

    assert facts.rest_days == 5
    assert facts.working_days == 26
    assert facts.holidays == (25,)


def test_november_mixed_holidays():
    # 02/11 falls on a Sunday, 15/11 on a Saturday
    facts = count_calendar_facts('2025-11')

    assert facts.total_days == 30
    assert facts.rest_days == 6
    assert facts.working_days == 24
    assert facts.holidays == (15,)


def test_leap_february():
    facts = count_calendar_facts('2024-02')

    assert facts.total_days == 29
    assert facts.rest_days == 4
    assert facts.working_days == 25
    assert count_calendar_facts('2023-02').total_days == 28


@pytest.mark.parametrize("value", ['2025-13', '2025/10', 'october', '25-10', ''])
def test_invalid_reference_month(value):
    with pytest.raises(ValueError):
        count_calendar_facts(value)


def test_parse_year_month():
    assert parse_year_month(' 2025-03 ') == (2025, 3)

# ============================================================================
# Formatters and validators
# ============================================================================

def test_ptbr_formatting():
    assert format_number(Decimal('1234.5')) == '1.234,50'
    assert format_currency(Decimal('2728.7615')) == 'R$ 2.728,76'
    assert format_percentage(Decimal('7.500')) == '7,50%'
    assert format_hours(Decimal('12.5')) == '12,50h'


def test_to_decimal():
    assert to_decimal('') == 0
    assert to_decimal(None) == 0
    assert to_decimal('10,5') == Decimal('10.5')
    assert to_decimal(3) == Decimal('3')
    with pytest.raises(ValueError):
        to_decimal('abc', 'base_salary')
    with pytest.raises(ValueError):
        to_decimal('NaN')

# ============================================================================
# Input resolution
# ============================================================================

def test_auto_dsr_from_calendar():
    resolved = resolve_inputs({'reference_month': '2025-12', 'base_salary': '3000'})

    assert resolved.auto_dsr
    assert resolved.inputs.rest_days == 5
    assert resolved.inputs.working_days == 26
    assert resolved.inputs.divisor == Decimal('220')


def test_manual_rest_days_rederive_working_days():
    resolved = resolve_inputs({
        'reference_month': '2025-12',
        'auto_dsr': 'false',
        'rest_days': 6
    })

    assert not resolved.auto_dsr
    assert resolved.inputs.rest_days == 6
    assert resolved.inputs.working_days == 25


def test_manual_rest_days_keep_one_working_day():
    resolved = resolve_inputs({'reference_month': '2025-02', 'auto_dsr': False, 'rest_days': 40})

    assert resolved.inputs.working_days == 1


def test_default_advance_is_40_percent():
    resolved = resolve_inputs({'reference_month': '2025-12', 'base_salary': '3000.00'})

    assert resolved.inputs.advance == Decimal('1200.00')
    assert default_advance(Decimal('1234.57')) == Decimal('493.83')


def test_explicit_zero_advance_is_kept():
    resolved = resolve_inputs({'reference_month': '2025-12', 'base_salary': '3000.00', 'advance': 0})

    assert resolved.inputs.advance == 0


def test_reference_month_defaults_to_today():
    resolved = resolve_inputs({}, today=date(2025, 11, 3))

    assert resolved.reference_month == '2025-11'
    assert resolved.inputs.base_salary == 0
    assert resolved.inputs.rest_days == 6


def test_hours_and_discounts_are_read():
    resolved = resolve_inputs({
        'reference_month': '2025-12',
        'base_salary': 2500,
        'dependents': '2',
        'divisor': '200',
        'overtime_50_hours': '10,5',
        'holiday_hours': 8,
        'health_plan': '120.90',
        'meal_benefit': ''
    })

    inputs = resolved.inputs
    assert inputs.dependents == 2
    assert inputs.divisor == Decimal('200')
    assert inputs.overtime_50_hours == Decimal('10.5')
    assert inputs.holiday_hours == Decimal('8')
    assert inputs.health_plan == Decimal('120.90')
    assert inputs.meal_benefit == 0


def test_non_numeric_value_rejected():
    with pytest.raises(ValueError):
        resolve_inputs({'reference_month': '2025-12', 'base_salary': 'three thousand'})


def test_fractional_rest_days_rejected():
    with pytest.raises(ValueError):
        resolve_inputs({'reference_month': '2025-12', 'auto_dsr': False, 'rest_days': '4.5'})


def test_fractional_dependents_rejected():
    with pytest.raises(ValueError):
        resolve_inputs({'reference_month': '2025-12', 'dependents': 1.5})


def test_whole_number_strings_accepted_for_days():
    resolved = resolve_inputs({'reference_month': '2025-12', 'auto_dsr': False, 'rest_days': '4.0'})

    assert resolved.inputs.rest_days == 4
    assert resolved.inputs.working_days == 27
