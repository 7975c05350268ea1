from enum import StrEnum


class FieldSizes:
    TINY = 20
    SHORT = 50
    MEDIUM = 255
    LONG = 500


class UserRole(StrEnum):
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"


class TeamRole(StrEnum):
    LEAD = "LEAD"
    MEMBER = "MEMBER"


class TaskStatus(StrEnum):
    NOT_STARTED = "Not Started"
    WORKING_ON_IT = "Working on it"
    STUCK = "Stuck"
    DONE = "Done"


UNASSIGNED_OWNER = "Unassigned"
DEFAULT_COLUMN_COLOR = "#71717a"

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

# Signed 64-bit range of integer primary keys
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1
