"""
Word Controller

Dictionary endpoints: word validation with suggestions and word list statistics.
"""

from datetime import datetime
from flask import Blueprint, request, jsonify

from ..services.word_service import get_word_service
from ..utils.decorators import require_json_fields
from ..utils.game_logger import game_logger

word_bp = Blueprint('word', __name__)


@word_bp.route('/validate-word', methods=['POST'])
@require_json_fields('word')
def validate_word(data):
    """Check a word against the dictionary."""
    word_service = get_word_service()
    if not word_service:
        return jsonify({
            'success': False,
            'error': 'Word service unavailable'
        }), 500

    word = data['word']
    if not isinstance(word, str):
        return jsonify({'success': False, 'error': 'Word is required'}), 400

    is_valid = word_service.is_valid(word)
    suggestions = [] if is_valid else word_service.get_suggestions(word[:2], 5)

    game_logger.log_user_action(request, 'validate_word', is_valid=is_valid,
                                suggestions_count=len(suggestions))

    return jsonify({
        'isValid': is_valid,
        'suggestions': suggestions,
        'message': 'Valid word!' if is_valid else 'Word not in dictionary',
        'difficulty': word_service.get_word_difficulty(word) if is_valid else None
    })


@word_bp.route('/words/stats', methods=['GET'])
def word_stats():
    word_service = get_word_service()
    if not word_service:
        return jsonify({
            'success': False,
            'error': 'Word service unavailable'
        }), 500

    return jsonify({
        'stats': word_service.get_word_stats(),
        'timestamp': datetime.now().isoformat()
    })
