"""Closed value sets shared by models, schemas and services."""

import enum


class UserRole(str, enum.Enum):
    ADMIN = "Admin"
    MARKETING = "Marketing"
    SALES = "Sales"


class LeadStatus(str, enum.Enum):
    NEW = "New"
    NO_ANSWER = "NoAnswer"
    FOLLOW_UP = "FollowUp"
    BUSY = "Busy"
    CANCELED = "Canceled"
    DONE_DEAL = "DoneDeal"
    NOT_INTERESTED = "NotInterested"
    WRONG_NUMBER = "WrongNumber"
    CLOSED = "Closed"
    NO_BUDGET = "NoBudget"
    POTENTIAL = "Potential"


TERMINAL_STATUSES = frozenset({LeadStatus.DONE_DEAL, LeadStatus.CANCELED})

STATUS_DISPLAY_NAMES = {
    LeadStatus.NEW: "New Lead",
    LeadStatus.NO_ANSWER: "No Answer",
    LeadStatus.FOLLOW_UP: "Follow Up",
    LeadStatus.BUSY: "Busy",
    LeadStatus.CANCELED: "Canceled",
    LeadStatus.DONE_DEAL: "Done Deal",
    LeadStatus.NOT_INTERESTED: "Not Interested",
    LeadStatus.WRONG_NUMBER: "Wrong Number",
    LeadStatus.CLOSED: "Closed",
    LeadStatus.NO_BUDGET: "No Budget",
    LeadStatus.POTENTIAL: "Potential",
}


def is_terminal(status: LeadStatus) -> bool:
    return status in TERMINAL_STATUSES


def status_display_name(status: LeadStatus) -> str:
    return STATUS_DISPLAY_NAMES.get(status, "")


class UnitType(str, enum.Enum):
    APARTMENT = "Apartment"
    PENTHOUSE = "Penthouse"
    I_VILLA = "IVilla"
    STAND_ALONE_VILLA = "StandAloneVilla"
    TOWN_HOUSE = "TownHouse"
    TWIN_HOUSE = "TwinHouse"
    STUDIO = "Studio"
    PARK_VILLA = "ParkVilla"
    CHALET = "Chalet"
    DUPLEX = "Duplex"


class UnitSaleType(str, enum.Enum):
    SALE = "Sale"
    RENT = "Rent"


class Currency(str, enum.Enum):
    EGP = "EGP"
    USD = "USD"


def enum_values(enum_cls) -> list[str]:
    """Persist enum values ("DoneDeal") rather than member names ("DONE_DEAL")."""
    return [member.value for member in enum_cls]
