from enum import Enum, StrEnum

class Severity(Enum):
    INFO = 1
    WARN = 2

# What a notification is about, so the timeline view can file advice next to
# the thing it concerns.
class Topic(StrEnum):
    Summary = 'summary'
    Data = 'data'
    Conflict = 'conflict'
    Utilization = 'utilization'

class Notification:
    def __init__(self, severity: Severity, message: str, topic: Topic = Topic.Summary):
        if not isinstance(severity, Severity):
            raise ValueError("severity must be an instance of Severity enum")
        self.severity = severity
        self.message = message
        self.topic = topic

    def __str__(self):
        return f'{self.severity.name} [{self.topic}]: {self.message}'

    def __repr__(self):
        return f'Notification({self.severity.name}, {self.topic}, {self.message!r})'

    def to_dict(self):
        return {
                'severity': self.severity.name,
                'topic': str(self.topic),
                'message': self.message
                }

def by_topic(notifications: list[Notification], topic: Topic) -> list[Notification]:
    return [n for n in notifications if n.topic == topic]
