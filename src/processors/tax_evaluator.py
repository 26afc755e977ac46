"""Progressive withholding for INSS (social security) and IRRF (income tax).

Both tables use the "parcela a deduzir" form: the bracket rate is applied to
the whole base and the bracket deduction removes what the lower brackets
would not have charged. This is the closed form of a marginal calculation.
"""
from decimal import Decimal

from models.payroll import TaxTable, Withholding, ZERO
from config.tax_tables import CLT_2025

HUNDRED = Decimal('100')


def evaluate_social_security(gross_base: Decimal,
                             table: TaxTable = CLT_2025.social_security_table) -> Withholding:
    """INSS withheld on the gross earnings, capped at the table ceiling"""
    gross_base = max(gross_base, ZERO)
    if gross_base == 0:
        return Withholding()

    effective_base = min(gross_base, table.ceiling)
    bracket = table.select(effective_base)

    amount = effective_base * bracket.rate - bracket.deduction

    return Withholding(
        amount=amount,
        nominal_rate=bracket.rate * HUNDRED,
        effective_rate=amount / gross_base * HUNDRED
    )


def evaluate_income_tax(base: Decimal,
                        dependents: int = 0,
                        table: TaxTable = CLT_2025.income_tax_table,
                        dependent_deduction: Decimal = CLT_2025.dependent_deduction) -> Withholding:
    """IRRF withheld on the base left after INSS.

    The bracket is chosen on the base reduced by the dependent deduction, but
    the effective rate is reported against the base before that deduction.
    """
    taxable_base = base - max(dependents, 0) * dependent_deduction
    if taxable_base <= 0:
        return Withholding()

    bracket = table.select(taxable_base)
    if bracket.rate == 0:
        # Exempt bracket
        return Withholding()

    amount = max(taxable_base * bracket.rate - bracket.deduction, ZERO)
    effective_rate = amount / base * HUNDRED if base > 0 else ZERO

    return Withholding(
        amount=amount,
        nominal_rate=bracket.rate * HUNDRED,
        effective_rate=effective_rate
    )
