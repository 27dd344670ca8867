# routes/readings.py
from flask import Blueprint, request, jsonify, current_app
from datetime import datetime, timezone
from pydantic import ValidationError
import logging
import re

from database import get_db
from schemas.bible_schemas import ReadingCreate
from utils.auth import token_required
from utils.errors import ParseError

readings_bp = Blueprint('readings', __name__)
logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r'score:\s*(\d+)')
PASSING_SCORE = 2


def _score_of(reflection):
    if not isinstance(reflection, str):
        return None
    match = SCORE_PATTERN.search(reflection)
    return int(match.group(1)) if match else None


def _reading_json(row):
    score = _score_of(row.get('reflection'))
    return {
        'id': row.get('id'),
        'reference': row.get('reference'),
        'reflection': row.get('reflection'),
        'score': score,
        'completed': score is not None and score >= PASSING_SCORE,
        'created_at': row.get('created_at'),
    }


@readings_bp.route('/', methods=['POST'])
@token_required
def create_reading(current_user):
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Invalid JSON payload'}), 400

    try:
        reading = ReadingCreate.model_validate(data)
    except ValidationError as e:
        return jsonify({'error': 'Invalid reading', 'details': [err['msg'] for err in e.errors()]}), 400

    try:
        reference = current_app.extensions['reference_parser'].parse(reading.reference)
    except ParseError as e:
        return jsonify({'error': str(e)}), 400

    # Quiz scores live inside the reflection text as "score: N"
    reflection_parts = []
    if reading.score is not None:
        reflection_parts.append(f"score: {reading.score}")
    if reading.reflection:
        reflection_parts.append(reading.reflection)

    row = {
        'user_id': current_user,
        'reference': str(reference),
        'reflection': '\n'.join(reflection_parts) or None,
        'created_at': datetime.now(timezone.utc).isoformat(),
    }

    try:
        with get_db() as client:
            response = client.table('daily_readings').insert(row).execute()
    except Exception as e:
        logger.error(f"Error recording reading: {str(e)}")
        return jsonify({'error': str(e)}), 500

    if not response.data:
        return jsonify({'error': 'Failed to record reading'}), 500

    logger.info(f"Recorded reading {reference} for user {current_user}")
    return jsonify({
        'message': 'Reading recorded successfully',
        'reading': _reading_json(response.data[0])
    }), 201


@readings_bp.route('/today', methods=['GET'])
@token_required
def get_today_readings(current_user):
    today = datetime.now(timezone.utc).date().isoformat()

    try:
        with get_db() as client:
            query = client.table('daily_readings').select('*')\
                .eq('user_id', current_user)\
                .gte('created_at', today)
            reference = request.args.get('reference')
            if reference:
                query = query.eq('reference', reference)
            response = query.order('created_at', desc=True).execute()
    except Exception as e:
        logger.error(f"Error fetching today's readings: {str(e)}")
        return jsonify({'error': str(e)}), 500

    return jsonify([_reading_json(row) for row in response.data])
