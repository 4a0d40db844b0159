"""Constants for the form builder"""

# ==================== File Paths ====================
FORMS_DIR_DEFAULT = "data/forms"
DATABASE_PATH = "data/formbuilder.db"
LOG_FILE_DEFAULT = "data/formbuilder.log"

# ==================== Field Keys ====================
FIELD_KEY_PREFIX = "field_"
COPY_TITLE_SUFFIX = " (Copy)"

# ==================== Synthesized Defaults ====================
DEFAULT_OPTIONS = ["Option 1", "Option 2", "Option 3"]
PLACEHOLDER_TEXT = "Enter text..."
PLACEHOLDER_EMAIL = "Enter email..."
PLACEHOLDER_NUMBER = "Enter number..."
RATING_MIN = 1
RATING_MAX = 5
RATING_SCALE_LIMIT = 10  # wider ranges render as a number input
TEXTAREA_ROWS = 4
SECTION_TITLE = "Section Header"
DIVIDER_TITLE = "Divider"
HTML_DEFAULT_CONTENT = "<p>Custom HTML content</p>"

# ==================== Inference Markers ====================
SIGNATURE_MARKER = "Signature"
SECTION_MARKER = "Section"
DIVIDER_MARKER = "Divider"

# ==================== UI Schema ====================
UI_WIDGET = "ui:widget"
UI_OPTIONS = "ui:options"

# ==================== Template Names ====================
TEMPLATE_BUILDER = "builder.html.j2"
TEMPLATE_PREVIEW = "preview.html.j2"
TEMPLATE_LIVE = "live.html.j2"

# ==================== Validation Messages ====================
MSG_REQUIRED = "This field is required"
MSG_NOT_A_NUMBER = "Must be a number"
MSG_MIN = "Must be at least {minimum}"
MSG_MAX = "Must be no more than {maximum}"
MSG_INVALID_OPTION = "Must be one of the listed options"
MSG_INVALID_EMAIL = "Must be a valid email address"
MSG_INVALID_DATE = "Must be a valid date"

# ==================== Database Configuration ====================
DB_MAX_CONNECTIONS = 8
DB_STALE_TIMEOUT = 300  # 5 minutes

DB_PRAGMAS = {
    "journal_mode": "wal",
    "synchronous": "NORMAL",
    "busy_timeout": 5000,
    "foreign_keys": 1,
}
