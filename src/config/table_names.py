from enum import Enum


class TableNames(str, Enum):
    ADMINS = "admins"
    GUESTS = "guests"
    RSVPS = "rsvps"
