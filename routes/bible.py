# routes/bible.py
from flask import Blueprint, jsonify, request, current_app
from datetime import datetime, timezone
from pydantic import ValidationError
import logging
import anthropic

from models.bible import ChapterPosition
from schemas.bible_schemas import ChapterRequest
from utils.auth import token_required
from utils.errors import FetchError, NavigationError, ParseError
from utils.navigation import Direction, selection
from utils.reading_plan import chapter_for_day
from utils.text import normalize

bible_bp = Blueprint('bible', __name__)
logger = logging.getLogger(__name__)


def _catalogue():
    return current_app.extensions['catalogue']


def _parser():
    return current_app.extensions['reference_parser']


def _navigator():
    return current_app.extensions['navigator']


def _fetch_error_response(e):
    status = 404 if e.status == 404 else 502
    return jsonify({'error': e.message}), status


def _utc_today():
    return datetime.now(timezone.utc).date()


def _resolve_position(book, chapter):
    """Canonical ChapterPosition for a book name taken from the URL or a body"""
    found = _catalogue().find(book)
    if found is None:
        raise ParseError(f"book not found: {normalize(book)}")
    if chapter < 1:
        raise ParseError("chapter must be >= 1")
    return ChapterPosition(found.name, chapter)


@bible_bp.route('/books', methods=['GET'])
def get_books():
    return jsonify([book.to_json() for book in _catalogue()])


@bible_bp.route('/parse', methods=['GET'])
def parse_reference():
    query_str = request.args.get('q', '')
    try:
        reference = _parser().parse(query_str)
    except ParseError as e:
        return jsonify({'error': str(e)}), 400
    return jsonify(reference.to_json())


@bible_bp.route('/chapter/<book>', methods=['GET'])
def get_book_start(book):
    """First chapter of a book picked from the list"""
    try:
        found = _catalogue().find(book)
        if found is None:
            raise ParseError(f"book not found: {normalize(book)}")
        chapter_text = _navigator().load(selection(found.name))
    except ParseError as e:
        return jsonify({'error': str(e)}), 400
    except FetchError as e:
        return _fetch_error_response(e)
    except Exception as e:
        logger.error(f"Error opening {book}: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    return jsonify(chapter_text.to_json())


@bible_bp.route('/chapter/<book>/<int:chapter>', methods=['GET'])
def get_chapter(book, chapter):
    try:
        position = _resolve_position(book, chapter)
        chapter_text = _navigator().load(position)
    except ParseError as e:
        return jsonify({'error': str(e)}), 400
    except FetchError as e:
        return _fetch_error_response(e)
    except Exception as e:
        logger.error(f"Error loading {book} {chapter}: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    return jsonify(chapter_text.to_json())


@bible_bp.route('/chapter/<book>/<int:chapter>/<direction>', methods=['GET'])
def navigate_chapter(book, chapter, direction):
    try:
        position = _resolve_position(book, chapter)
        chapter_text = _navigator().step(position, Direction.from_value(direction))
    except (ParseError, NavigationError) as e:
        return jsonify({'error': str(e)}), 400
    except FetchError as e:
        return _fetch_error_response(e)
    except Exception as e:
        logger.error(f"Error navigating {direction} from {book} {chapter}: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    payload = chapter_text.to_json()
    payload['from'] = position.to_json()
    return jsonify(payload)


@bible_bp.route('/chapter', methods=['POST'])
def post_chapter():
    """Same contract as the old edge function: {book, chapter} in, chapter text out"""
    data = request.get_json(silent=True)
    if not data:
        return jsonify({'error': 'Book and chapter are required'}), 400

    try:
        chapter_request = ChapterRequest.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Invalid chapter request: {data}")
        return jsonify({'error': 'Book and chapter are required', 'details': [err['msg'] for err in e.errors()]}), 400

    try:
        position = _resolve_position(chapter_request.book, chapter_request.chapter)
        chapter_text = _navigator().load(position)
    except ParseError as e:
        return jsonify({'error': str(e)}), 400
    except FetchError as e:
        return _fetch_error_response(e)
    except Exception as e:
        logger.error(f"Error loading {chapter_request.book} {chapter_request.chapter}: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    return jsonify(chapter_text.to_json())


@bible_bp.route('/passage', methods=['GET'])
def get_passage():
    query_str = request.args.get('q', '')
    if not query_str.strip():
        return jsonify({'error': 'Query is required'}), 400

    try:
        reference = _parser().parse(query_str)
        chapter_text = _navigator().load(reference)
    except ParseError as e:
        return jsonify({'error': str(e)}), 400
    except FetchError as e:
        return _fetch_error_response(e)
    except Exception as e:
        logger.error(f"Passage error for '{query_str}': {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    payload = chapter_text.to_json()
    payload['parsed'] = reference.to_json()
    return jsonify(payload)


@bible_bp.route('/daily', methods=['GET'])
def get_daily_chapter():
    today = _utc_today()
    try:
        position = chapter_for_day(today, _catalogue(), current_app.config['READING_PLAN_START'])
        logger.info(f"Daily chapter for {today.isoformat()}: {position}")
        chapter_text = _navigator().load(position)
    except FetchError as e:
        return _fetch_error_response(e)
    except Exception as e:
        logger.error(f"Error loading daily chapter for {today.isoformat()}: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    payload = chapter_text.to_json()
    payload['date'] = today.isoformat()
    return jsonify(payload)


@bible_bp.route('/ai-search', methods=['GET'])
@token_required
def ai_search_bible(current_user):
    logger.info("AI Search endpoint called")
    query_str = request.args.get('q', '')
    if not query_str.strip():
        logger.warning("AI Search called with empty query")
        return jsonify({'error': 'Query is required'}), 400

    lookup = current_app.extensions['passage_lookup']
    try:
        suggestion = lookup.suggest_reference(query_str, _catalogue().names())
    except ValueError as e:
        logger.error(f"AI search configuration error: {str(e)}")
        return jsonify({'error': 'AI search configuration error.'}), 500
    except anthropic.APIError as api_err:
        logger.error(f"Anthropic API error: {api_err}", exc_info=True)
        return jsonify({'error': 'AI service communication error.'}), 502
    except Exception as e:
        logger.error(f"AI search error: {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    if not suggestion:
        logger.info(f"LLM could not identify a specific reference for query: '{query_str}'")
        return jsonify({'message': 'Could not identify a specific Bible reference for your query.', 'type': 'info'}), 200

    try:
        reference = _parser().parse(suggestion)
    except ParseError as e:
        logger.warning(f"AI suggested an unusable reference '{suggestion}': {str(e)}")
        return jsonify({'message': f"AI suggested '{suggestion}', which is not a valid reference.", 'type': 'warning'}), 200

    try:
        chapter_text = _navigator().load(reference)
    except FetchError as e:
        return _fetch_error_response(e)
    except Exception as e:
        logger.error(f"Error loading AI suggestion '{suggestion}': {str(e)}", exc_info=True)
        return jsonify({'error': str(e)}), 500

    payload = chapter_text.to_json()
    payload['parsed'] = reference.to_json()
    payload['ai_suggestion'] = True
    return jsonify(payload)
