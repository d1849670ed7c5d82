"""
Helper Functions
Utility functions used across the application
"""
from datetime import datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from flask import session, jsonify
from functools import wraps
import pytz


GRADER_ROLES = ('ADMIN', 'TEACHER')


def now_utc():
    """Get current UTC timestamp"""
    return datetime.now(timezone.utc)


def parse_timestamp(value):
    """Parse an ISO-8601 timestamp from the API into an aware UTC datetime"""
    if not value:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    if parsed.tzinfo is None:
        return pytz.utc.localize(parsed)
    return parsed.astimezone(timezone.utc)


def to_iso(value):
    if value is None:
        return None
    return value.isoformat().replace('+00:00', 'Z')


def utc_to_local(utc_dt, tz_name='Asia/Kolkata'):
    """Convert UTC datetime to the dashboard timezone for display"""
    if not utc_dt:
        return None
    if utc_dt.tzinfo is None:
        utc_dt = pytz.utc.localize(utc_dt)
    return utc_dt.astimezone(pytz.timezone(tz_name))


def format_timestamp(utc_dt, tz_name='Asia/Kolkata'):
    local = utc_to_local(utc_dt, tz_name)
    if local is None:
        return None
    return local.strftime('%d %b %Y, %I:%M %p')


def round_percentage(value):
    """
    Round a percentage to one decimal place, half up.
    Pass/fail and the displayed percentage both go through here.
    """
    return float(Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def get_current_user():
    """Get current signed-in user from session"""
    if 'token' not in session:
        return None
    return session.get('user') or {}


def _error(message, status):
    return jsonify({'success': False, 'message': message}), status


# Decorators
def require_login(f):
    """Decorator to require a backend session token"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'token' not in session:
            return _error('Login required', 401)
        return f(*args, **kwargs)
    return decorated_function


def require_grader(f):
    """
    Decorator to require a grading role (admin or teacher)
    Students get 403, anonymous users 401
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'token' not in session:
            return _error('Login required', 401)
        role = (session.get('user') or {}).get('role', '')
        if str(role).upper() not in GRADER_ROLES:
            return _error('Grader access required', 403)
        return f(*args, **kwargs)
    return decorated_function
