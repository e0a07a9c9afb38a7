"""Fester Aktivitätenkatalog der Redmine-Instanz."""

from __future__ import annotations

from typing import Optional

from .models import DEFAULT_ACTIVITY_ID, Activity

ACTIVITIES: tuple[Activity, ...] = (
    Activity(16, "Estimation"),
    Activity(147, "Bench process"),
    Activity(17, "Bugfix"),
    Activity(141, "Client request/issues"),
    Activity(146, "Consultancy"),
    Activity(18, "Content"),
    Activity(119, "Content-Outstaffing"),
    Activity(121, "Corrections after Feedback"),
    Activity(8, "Design"),
    Activity(140, "Developers request/issues"),
    Activity(9, "Development"),
    Activity(15, "Document"),
    Activity(144, "General Tasks"),
    Activity(149, "Handling complaints"),
    Activity(139, "Job/salary assessments"),
    Activity(60, "Marketing"),
    Activity(12, "Meeting"),
    Activity(142, "Offboarding"),
    Activity(138, "Onboarding"),
    Activity(59, "PM"),
    Activity(120, "Promotion-Outstaffing"),
    Activity(58, "Regression Testing"),
    Activity(143, "Reports"),
    Activity(40, "Research"),
    Activity(57, "Self Bugfix"),
    Activity(148, "Situation/Health check"),
    Activity(14, "Support"),
    Activity(11, "Testing"),
    Activity(150, "commun. with clients (letters)"),
    Activity(151, "non-UA invoices"),
)


def find_activity(activity_id: str | int) -> Optional[Activity]:
    value = str(activity_id).strip()
    return next((activity for activity in ACTIVITIES if activity.value == value), None)


def activity_label(activity_id: str | int) -> str:
    activity = find_activity(activity_id)
    return activity.label if activity else str(activity_id)


__all__ = ["ACTIVITIES", "DEFAULT_ACTIVITY_ID", "activity_label", "find_activity"]
