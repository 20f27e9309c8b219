"""Shared failure code constants for import error handling."""

UNSUPPORTED_FILE_TYPE = "unsupported_file_type"
INVALID_JSON = "invalid_json"
NOT_AN_ARRAY = "not_an_array"
EMPTY_WORKBOOK = "empty_workbook"
NO_DATA_ROWS = "no_data_rows"
WORKBOOK_UNREADABLE = "workbook_unreadable"
TOO_MANY_ROWS = "too_many_rows"

UPLOAD_TIMEOUT = "upload_timeout"
UPLOAD_TRANSPORT = "upload_transport"
TEMPLATE_DOWNLOAD = "template_download"
UPLOAD_ERROR = "upload_error"

# Detected before any remote call; the pipeline returns to idle.
INPUT_FORMAT_FAILURES = [
    UNSUPPORTED_FILE_TYPE,
    INVALID_JSON,
    NOT_AN_ARRAY,
    EMPTY_WORKBOOK,
    NO_DATA_ROWS,
    WORKBOOK_UNREADABLE,
    TOO_MANY_ROWS,
]

# No structured response body; the decoded batch stays resubmittable.
TRANSPORT_FAILURES = [
    UPLOAD_TIMEOUT,
    UPLOAD_TRANSPORT,
    UPLOAD_ERROR,
]
