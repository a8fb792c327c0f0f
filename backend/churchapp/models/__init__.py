from churchapp.models.duty_type import DutyType
from churchapp.models.followup_reminder import FollowupReminder
from churchapp.models.newcomer import Newcomer
from churchapp.models.notification import Notification
from churchapp.models.profile import Profile
from churchapp.models.recurring_pattern import RecurringPattern
from churchapp.models.service import Service
from churchapp.models.service_assignment import ServiceAssignment
from churchapp.models.service_template import ServiceTemplate

__all__ = [
    "DutyType",
    "FollowupReminder",
    "Newcomer",
    "Notification",
    "Profile",
    "RecurringPattern",
    "Service",
    "ServiceAssignment",
    "ServiceTemplate",
]
