from .tax_evaluator import evaluate_social_security, evaluate_income_tax
from .statement_builder import build_statement
from .input_resolver import resolve_inputs, ResolvedRequest

# StatementExporter lives in processors.statement_exporter; it loads
# config.settings, which reads .env and creates the output folders.

__all__ = [
    'evaluate_social_security',
    'evaluate_income_tax',
    'build_statement',
    'resolve_inputs',
    'ResolvedRequest'
]
