"""Harness constants - centralized configuration"""

# =============================================================================
# TIMEOUTS
# =============================================================================

# Idle time after the last send or get_updates response before rendered
# state is considered stable
IDLE_WINDOW_MS = 300

# Upper bound for every wait (element, form enabled, quiescence)
MAX_WAIT_MS = 5000

# How often a Python-side predicate is re-evaluated
POLL_INTERVAL_MS = 50

# Server startup timeout (30 seconds total)
SERVER_STARTUP_TIMEOUT_SECONDS = 30

# =============================================================================
# SERVER
# =============================================================================

DEFAULT_BASE_URL = "http://localhost:9981/"

# Development fixture account
DEFAULT_USERNAME = "iago@humbughq.com"
DEFAULT_PASSWORD = "FlokrWdZefyEWkfI"

# Only arrival matters, bodies are never inspected
GET_UPDATES_PATTERN = r"/json/get_updates"
SEND_MESSAGE_PATTERN = r"/json/send_message"

# =============================================================================
# TABLES
# =============================================================================

HOME_TABLE = "zhome"
FILTERED_TABLE = "zfilt"

# Logical table names accepted by the assertion engine
TABLE_IDS = {
    "home": HOME_TABLE,
    "filtered": FILTERED_TABLE,
}

# =============================================================================
# SELECTORS
# =============================================================================

HEADING_SELECTOR = ".recipient_row .right_part"
BODY_SELECTOR = ".message_content"

COMPOSE_BUTTON_TEMPLATE = "#left_bar_compose_{kind}_button_big"
COMPOSE_FORM = 'form[action^="/json/send_message"]'
COMPOSE_SEND_BUTTON = "#compose-send-button"
COMPOSE_SEND_ENABLED = "#compose-send-button:enabled"

LOGIN_LINK = 'a[href^="/accounts/login"]'
LOGIN_FORM = 'form[action^="/accounts/login"]'

UN_NARROW_BUTTON = ".narrowed_to_bar .close"

# Narrow affordances are addressed by their title attribute
NARROW_STREAM_TITLE = 'Narrow to stream "{stream}"'
NARROW_SUBJECT_TITLE = 'Narrow to stream "{stream}", subject "{subject}"'
NARROW_PRIVATE_TITLE = "Narrow to your private messages with {names}"

# =============================================================================
# URL AND CONTENT PATTERNS
# =============================================================================

ACCOUNTS_HOME_URL = r"^http://[^/]+/accounts/home"
HOME_PAGE_URL = r"^http://[^/]+/#?$"

WELL_FORMED_HEADING = r"(^You and )|( \| )"
WELL_FORMED_BODY = r"\A(<p>(.|\n)*</p>)?\Z"

# =============================================================================
# RETRY CONFIGURATION
# =============================================================================

NAVIGATION_MAX_RETRIES = 3
