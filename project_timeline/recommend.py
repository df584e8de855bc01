from typing import Dict

from .types import Availability, OVER_UTILIZED_THRESHOLD, UNDER_UTILIZED_THRESHOLD
from .notification import Notification, Severity, Topic
from .conflicts import conflict_count, conflict_groups

# Statefully appends planning advice to notifications. Every check can fire
# on its own; the all clear only fires when none of them did.
def recommend(conflicts: Dict[str, set[str]], availability: list[Availability], notifications: list[Notification]) -> list[Notification]:
    advice: list[Notification] = []

    count = conflict_count(conflicts)
    if count > 0:
        groups = conflict_groups(conflicts)
        advice.append(Notification(Severity.WARN, f"Resolve {count} scheduling conflicts: {len(groups)} groups of overlapping tasks share an assignee.", Topic.Conflict))

    # Raw utilization, double booking can push it past 100.
    over = [a for a in availability if a.utilization > OVER_UTILIZED_THRESHOLD]
    if over:
        names = ', '.join(a.person.name for a in over)
        advice.append(Notification(Severity.WARN, f"{len(over)} team members are over-utilized (>{OVER_UTILIZED_THRESHOLD}%): {names}. Consider redistributing tasks.", Topic.Utilization))

    under = [a for a in availability if a.utilization < UNDER_UTILIZED_THRESHOLD]
    if under:
        names = ', '.join(a.person.name for a in under)
        advice.append(Notification(Severity.INFO, f"{len(under)} team members are under-utilized (<{UNDER_UTILIZED_THRESHOLD}%): {names}. They can take on more work.", Topic.Utilization))

    if not advice:
        advice.append(Notification(Severity.INFO, "Schedule looks good: no conflicts and balanced utilization."))

    notifications.extend(advice)
    return advice
