"""Application-wide constants.

This module defines constants used throughout the application
to avoid magic numbers and ensure consistency.
"""

# String field lengths
MAX_EMAIL_LENGTH = 255
MAX_NAME_LENGTH = 255
MAX_USERNAME_LENGTH = 100
MAX_ROLE_NAME_LENGTH = 20
MAX_DESCRIPTION_LENGTH = 1000
MAX_ID_LENGTH = 36
MAX_MESSAGE_LENGTH = 4000

# Pagination defaults
DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
DEFAULT_MESSAGE_PAGE_SIZE = 50

# Header carrying the verified caller identity
IDENTITY_HEADER = "X-Identity-ID"
