from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Tuple, Optional, Dict, Any

ZERO = Decimal('0')


@dataclass(frozen=True)
class Bracket:
    """Tax table row: rate applied to the whole base, minus a fixed deduction"""
    upper_bound: Decimal
    rate: Decimal
    deduction: Decimal

    @property
    def is_unbounded(self) -> bool:
        return self.upper_bound.is_infinite()


@dataclass(frozen=True)
class TaxTable:
    """Ordered progressive table; brackets sorted by ascending ceiling"""
    name: str
    brackets: Tuple[Bracket, ...]
    require_unbounded: bool = False

    def __post_init__(self):
        if not self.brackets:
            raise ValueError(f"Tax table {self.name} has no brackets")

        previous = None
        for bracket in self.brackets:
            if bracket.rate < 0 or bracket.deduction < 0:
                raise ValueError(f"Tax table {self.name} has a negative rate or deduction")
            if previous is not None and bracket.upper_bound <= previous.upper_bound:
                raise ValueError(f"Tax table {self.name} ceilings must be strictly ascending")
            if previous is not None and previous.is_unbounded:
                raise ValueError(f"Tax table {self.name} has brackets after the unbounded one")
            previous = bracket

        if self.require_unbounded and not self.brackets[-1].is_unbounded:
            raise ValueError(f"Tax table {self.name} must end with an unbounded bracket")

    @property
    def ceiling(self) -> Decimal:
        return self.brackets[-1].upper_bound

    def select(self, base: Decimal) -> Bracket:
        """Return the first bracket whose ceiling covers the base"""
        for bracket in self.brackets:
            if base <= bracket.upper_bound:
                return bracket
        raise ValueError(f"Base {base} exceeds every bracket of {self.name}")


@dataclass(frozen=True)
class Withholding:
    """Amount withheld by a tax plus nominal and effective rates (percent)"""
    amount: Decimal = ZERO
    nominal_rate: Decimal = ZERO
    effective_rate: Decimal = ZERO


@dataclass(frozen=True)
class PayrollInputs:
    """Parameters of one monthly statement"""
    base_salary: Decimal = ZERO
    divisor: Decimal = Decimal('220')
    rest_days: int = 0
    working_days: int = 0
    dependents: int = 0
    # Hours
    night_shift_hours: Decimal = ZERO
    overtime_50_hours: Decimal = ZERO
    night_overtime_70_hours: Decimal = ZERO
    holiday_hours: Decimal = ZERO
    # Manual discounts
    advance: Decimal = ZERO
    health_plan: Decimal = ZERO
    dental_plan: Decimal = ZERO
    meal_benefit: Decimal = ZERO
    other_discounts: Decimal = ZERO


class LineKind(Enum):
    EARNING = 'P'
    DISCOUNT = 'D'


@dataclass(frozen=True)
class LineItem:
    """Single statement row"""
    code: str
    description: str
    reference: str
    earning: Decimal
    discount: Decimal
    kind: LineKind
    note: Optional[str] = None


@dataclass(frozen=True)
class TaxBases:
    social_security: Decimal
    income_tax: Decimal
    severance_fund: Decimal


@dataclass(frozen=True)
class PayrollResult:
    """Complete statement for one set of inputs"""
    lines: Tuple[LineItem, ...]
    total_earnings: Decimal
    total_discounts: Decimal
    net_pay: Decimal
    fgts: Decimal
    bases: TaxBases

    @property
    def earnings(self) -> Tuple[LineItem, ...]:
        return tuple(line for line in self.lines if line.kind is LineKind.EARNING)

    @property
    def discounts(self) -> Tuple[LineItem, ...]:
        return tuple(line for line in self.lines if line.kind is LineKind.DISCOUNT)

    def line(self, code: str) -> Optional[LineItem]:
        return next((l for l in self.lines if l.code == code), None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lines': [
                {
                    'code': l.code,
                    'description': l.description,
                    'reference': l.reference,
                    'earning': float(l.earning),
                    'discount': float(l.discount),
                    'type': l.kind.value,
                    'note': l.note
                }
                for l in self.lines
            ],
            'total_earnings': float(self.total_earnings),
            'total_discounts': float(self.total_discounts),
            'net_pay': float(self.net_pay),
            'fgts': float(self.fgts),
            'bases': {
                'inss': float(self.bases.social_security),
                'irrf': float(self.bases.income_tax),
                'fgts': float(self.bases.severance_fund)
            }
        }


@dataclass(frozen=True)
class CalendarFacts:
    """Day counts of a reference month"""
    year_month: str
    total_days: int
    rest_days: int
    working_days: int
    holidays: Tuple[int, ...] = field(default_factory=tuple)
