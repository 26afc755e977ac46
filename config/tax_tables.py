"""Tax tables and payroll constants (CLT, 2025).

Everything the calculators need is bundled in a ``PayrollConfig`` so another
tax year can be passed in without touching the algorithms.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from models.payroll import Bracket, TaxTable

UNBOUNDED = Decimal('Infinity')

# INSS - contribuição previdenciária (progressive, capped at the last ceiling)
INSS_TABLE_2025 = TaxTable(
    name="INSS 2025",
    brackets=(
        Bracket(Decimal('1518.00'), Decimal('0.075'), Decimal('0.00')),
        Bracket(Decimal('2793.88'), Decimal('0.09'), Decimal('22.77')),
        Bracket(Decimal('4190.83'), Decimal('0.12'), Decimal('106.59')),
        Bracket(Decimal('8157.41'), Decimal('0.14'), Decimal('190.40')),
    )
)

# IRRF - imposto de renda retido na fonte (monthly table from May/2025)
IRRF_TABLE_2025 = TaxTable(
    name="IRRF 2025",
    brackets=(
        Bracket(Decimal('2428.80'), Decimal('0'), Decimal('0')),
        Bracket(Decimal('2826.65'), Decimal('0.075'), Decimal('182.16')),
        Bracket(Decimal('3751.05'), Decimal('0.15'), Decimal('394.16')),
        Bracket(Decimal('4664.68'), Decimal('0.225'), Decimal('675.49')),
        Bracket(UNBOUNDED, Decimal('0.275'), Decimal('908.73')),
    ),
    require_unbounded=True
)

# New Year, Tiradentes, Labor Day, Independence, Aparecida,
# All Souls', Republic Proclamation, Christmas
FIXED_HOLIDAYS_BR = (
    (1, 1), (4, 21), (5, 1), (9, 7),
    (10, 12), (11, 2), (11, 15), (12, 25),
)


@dataclass(frozen=True)
class PayrollConfig:
    """Tables and constants used by one payroll computation"""
    social_security_table: TaxTable
    income_tax_table: TaxTable
    dependent_deduction: Decimal = Decimal('189.59')
    fgts_rate: Decimal = Decimal('0.08')
    standard_divisor: Decimal = Decimal('220')
    advance_rate: Decimal = Decimal('0.40')
    fixed_holidays: Tuple[Tuple[int, int], ...] = FIXED_HOLIDAYS_BR

    @property
    def social_security_ceiling(self) -> Decimal:
        return self.social_security_table.ceiling


CLT_2025 = PayrollConfig(
    social_security_table=INSS_TABLE_2025,
    income_tax_table=IRRF_TABLE_2025,
)
