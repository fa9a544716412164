"""Package-wide constants.

This module defines constants used throughout the package
to avoid magic numbers and magic strings.
"""

# Legacy encoding of "visible to every department" in stored lists
DEFAULT_ALL_DEPARTMENTS_TOKEN = "TODOS"

# String field lengths
MAX_ROLE_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 255
MAX_PERMISSION_KEY_LENGTH = 100

# Permission key format
PERMISSION_KEY_SEPARATOR = ":"
MANAGE_ACTION = "manage"
