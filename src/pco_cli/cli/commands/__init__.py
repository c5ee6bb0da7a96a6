"""
Command groups, one per Planning Center product.
"""

from . import calendar, check_ins, giving, groups, people, publishing, registrations, services, webhooks

GROUPS = [people, calendar, check_ins, giving, groups, publishing, registrations, services, webhooks]

__all__ = ["GROUPS"]
