from flask import Flask, request, jsonify, send_file
from pathlib import Path
import sys
import logging

sys.path.insert(0, str(Path(__file__).parent / 'src'))

from processors.input_resolver import resolve_inputs
from processors.statement_builder import build_statement
from processors.statement_exporter import StatementExporter
from utils.work_calendar import count_calendar_facts
from config.tax_tables import CLT_2025
from config.settings import SECRET_KEY, DEBUG, LOG_LEVEL, PORT

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['SECRET_KEY'] = SECRET_KEY
app.config['DEBUG'] = DEBUG


def error_response(e: Exception, status: int):
    return jsonify({
        'success': False,
        'message': str(e)
    }), status


def table_to_dict(table):
    return [
        {
            'limit': None if bracket.is_unbounded else float(bracket.upper_bound),
            'rate': float(bracket.rate),
            'deduction': float(bracket.deduction)
        }
        for bracket in table.brackets
    ]


def read_payload():
    """JSON body of the request; an empty body means all defaults"""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Request body must be a JSON object")
    return data


def resolved_to_dict(resolved):
    inputs = resolved.inputs
    return {
        'reference_month': resolved.reference_month,
        'auto_dsr': resolved.auto_dsr,
        'total_days': resolved.calendar.total_days,
        'rest_days': inputs.rest_days,
        'working_days': inputs.working_days,
        'base_salary': float(inputs.base_salary),
        'divisor': float(inputs.divisor),
        'advance': float(inputs.advance)
    }

# ============================================================================
# API Endpoints
# ============================================================================

@app.route('/api/statement', methods=['POST'])
def compute_statement():
    """Compute the payroll statement for the posted inputs"""
    try:
        resolved = resolve_inputs(read_payload())
        result = build_statement(resolved.inputs)

        return jsonify({
            'success': True,
            'inputs': resolved_to_dict(resolved),
            'result': result.to_dict()
        })

    except ValueError as e:
        return error_response(e, 400)
    except Exception as e:
        logger.exception("Statement computation failed")
        return error_response(e, 500)

@app.route('/api/statement/export', methods=['POST'])
def export_statement():
    """Compute the statement and download it as Excel"""
    try:
        resolved = resolve_inputs(read_payload())
        result = build_statement(resolved.inputs)

        filepath = StatementExporter().generate(result, resolved.reference_month)
        return send_file(filepath, as_attachment=True)

    except ValueError as e:
        return error_response(e, 400)
    except Exception as e:
        logger.exception("Statement export failed")
        return error_response(e, 500)

@app.route('/api/calendar/<year_month>')
def get_calendar(year_month):
    """Rest and working days of a month"""
    try:
        facts = count_calendar_facts(year_month, CLT_2025.fixed_holidays)
    except ValueError as e:
        return error_response(e, 400)

    return jsonify({
        'reference_month': facts.year_month,
        'total_days': facts.total_days,
        'rest_days': facts.rest_days,
        'working_days': facts.working_days,
        'holidays': list(facts.holidays)
    })

@app.route('/api/tables')
def get_tables():
    """Reference tax tables (2025)"""
    return jsonify({
        'inss': table_to_dict(CLT_2025.social_security_table),
        'irrf': table_to_dict(CLT_2025.income_tax_table),
        'dependent_deduction': float(CLT_2025.dependent_deduction),
        'fgts_rate': float(CLT_2025.fgts_rate),
        'standard_divisor': float(CLT_2025.standard_divisor)
    })

if __name__ == '__main__':
    app.run(host='0.0.0.0', port=PORT, debug=DEBUG)
