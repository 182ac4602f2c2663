from enum import StrEnum


# Placeholder glyph stored when a link is created without an emoji
DEFAULT_EMOJI = '🔗'

# Default Redis socket timeout (seconds) so an unreachable backend fails fast
DEFAULT_SOCKET_TIMEOUT = 5

# Seed data written to an empty link store on first run
# fmt: off
DEFAULT_LINKS = (
    {'title': 'LMS Kampus',       'url': 'https://lms.example.edu',     'emoji': '📚', 'description': 'Platform e-learning utama'},
    {'title': 'Google Classroom', 'url': 'https://classroom.google.com', 'emoji': '🎓', 'description': 'Kelas online'},
    {'title': 'Zoom Meeting',     'url': 'https://zoom.us',             'emoji': '💻', 'description': 'Video conference'},
    {'title': 'Microsoft Teams',  'url': 'https://teams.microsoft.com', 'emoji': '👥', 'description': 'Kolaborasi tim'},
    {'title': 'Google Drive',     'url': 'https://drive.google.com',    'emoji': '📁', 'description': 'Penyimpanan file'},
    {'title': 'Quizizz',          'url': 'https://quizizz.com',         'emoji': '🎮', 'description': 'Kuis interaktif'},
)
# fmt: on

# Name of the configuration section shared by all links API lambdas
LINKS_API_FUNCTION = 'links_api'


class Backend(StrEnum):
    """Supported link store backends (keys of the active backend config)."""

    JSON_FILE = 'json_file'
    REDIS = 'redis'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        PROJECT_ROOT = 'PROJECT_ROOT'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


class LogEvent(StrEnum):
    """Values of the `event` field attached to handler log records."""

    LINKS_LISTED = 'LINKS_LISTED'
    LINK_CREATED = 'LINK_CREATED'
    LINK_UPDATED = 'LINK_UPDATED'
    LINK_DELETED = 'LINK_DELETED'
    INVALID_JSON_BODY = 'INVALID_JSON_BODY'
    INVALID_LINK = 'INVALID_LINK'
    MISSING_LINK_ID = 'MISSING_LINK_ID'
    LINK_NOT_FOUND = 'LINK_NOT_FOUND'
    UPDATE_NOT_SUPPORTED = 'UPDATE_NOT_SUPPORTED'
    DATA_STORE_ERROR = 'DATA_STORE_ERROR'
    HEALTHCHECK_PASSED = 'HEALTHCHECK_PASSED'
    HEALTHCHECK_FAILED = 'HEALTHCHECK_FAILED'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
