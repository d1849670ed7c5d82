"""
Utils Package
"""
from schooladmin.utils.helpers import (
    now_utc,
    parse_timestamp,
    to_iso,
    utc_to_local,
    format_timestamp,
    round_percentage,
    get_current_user,
    require_login,
    require_grader
)

__all__ = [
    'now_utc',
    'parse_timestamp',
    'to_iso',
    'utc_to_local',
    'format_timestamp',
    'round_percentage',
    'get_current_user',
    'require_login',
    'require_grader'
]
