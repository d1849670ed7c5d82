"""
Attempt Routes
Taking tests, grading them and viewing results
"""
from flask import Blueprint, request, jsonify
from schooladmin.errors import ValidationError
from schooladmin.extensions import attempt_service, results_service
from schooladmin.utils import get_current_user, require_login, require_grader

attempts_bp = Blueprint('attempts', __name__)


def _json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def _attempt_view(attempt):
    view = results_service.present(attempt)
    view['time_remaining'] = attempt_service.time_remaining(attempt)
    return view


# ========================================
# LISTS
# ========================================

@attempts_bp.route('/tests/<int:test_id>/attempts')
@require_grader
def test_attempts(test_id):
    """All attempts for one test (teacher / admin)"""
    attempts = attempt_service.list_test_attempts(test_id)
    return jsonify({
        'success': True,
        'test_id': test_id,
        'summary': results_service.summarize(attempts),
        'attempts': [results_service.attempt_row(a) for a in attempts],
    })


@attempts_bp.route('/attempts/mine')
@require_login
def my_attempts():
    """Signed-in student's attempts, optionally filtered by subject"""
    subject_id = request.args.get('subject_id', type=int)
    attempts = attempt_service.list_my_attempts(subject_id)
    return jsonify({
        'success': True,
        'summary': results_service.summarize(attempts),
        'attempts': [results_service.attempt_row(a) for a in attempts],
    })


# ========================================
# TAKING A TEST
# ========================================

@attempts_bp.route('/tests/<int:test_id>/start', methods=['POST'])
@require_login
def start_attempt(test_id):
    user = get_current_user()
    attempt = attempt_service.start_attempt(test_id, user.get('id'))
    return jsonify({'success': True, 'attempt': _attempt_view(attempt)}), 201


@attempts_bp.route('/attempts/<int:attempt_id>')
@require_login
def get_attempt(attempt_id):
    attempt = attempt_service.get_attempt(attempt_id)
    return jsonify({'success': True, 'attempt': _attempt_view(attempt)})


@attempts_bp.route('/attempts/<int:attempt_id>/answers', methods=['POST'])
@require_login
def save_answer(attempt_id):
    """
    Auto-save one answer
    Payload: { "question_id": 1, "answer_text": "A" }
    """
    data = _json_body()
    question_id = data.get('question_id')
    if not isinstance(question_id, int):
        raise ValidationError('question_id is required')

    answer = attempt_service.save_answer(attempt_id, question_id, data.get('answer_text'))
    return jsonify({'success': True, 'answer': answer.to_dict()})


@attempts_bp.route('/attempts/<int:attempt_id>/submit', methods=['POST'])
@require_login
def submit_attempt(attempt_id):
    """
    Submit the test
    Payload (optional): { "answers": [ { "question_id": 1, "answer_text": "A" }, ... ] }
    """
    data = _json_body()
    answers = {}
    for item in data.get('answers') or []:
        if not isinstance(item, dict) or not isinstance(item.get('question_id'), int):
            raise ValidationError('Each answer needs a question_id')
        answers[item['question_id']] = item.get('answer_text')

    attempt = attempt_service.submit(attempt_id, answers)
    return jsonify({'success': True, 'attempt': _attempt_view(attempt)})


# ========================================
# GRADING
# ========================================

@attempts_bp.route('/attempts/<int:attempt_id>/grade')
@require_grader
def grading_form(attempt_id):
    """Pre-filled grades for the grading page"""
    attempt, grades = attempt_service.grading_form(attempt_id)
    return jsonify({
        'success': True,
        'attempt': _attempt_view(attempt),
        'passing_marks': attempt.test.passing_marks if attempt.test else None,
        'grades': grades,
    })


@attempts_bp.route('/attempts/<int:attempt_id>/grade', methods=['POST'])
@require_grader
def grade_attempt(attempt_id):
    """
    Grade a submitted attempt
    Payload: { "grades": [ { "answer_id": 1, "marks_obtained": 2, "is_correct": true }, ... ] }
    """
    data = _json_body()
    if 'grades' not in data:
        raise ValidationError('grades is required')

    user = get_current_user()
    attempt = attempt_service.grade(attempt_id, data['grades'], grader_id=user.get('id'))
    return jsonify({'success': True, 'attempt': _attempt_view(attempt)})


# ========================================
# RESULTS
# ========================================

@attempts_bp.route('/attempts/<int:attempt_id>/results')
@require_login
def results(attempt_id):
    attempt = attempt_service.get_attempt(attempt_id)
    return jsonify({'success': True, 'result': results_service.present(attempt)})
