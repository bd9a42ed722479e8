from models.room import Room
from models.event import Event, EventId, EventStatus, EventType, TeacherRef
from models.conflict import ConflictGroup, ConflictRecord, ConflictType
from models.course import Course, CourseSelection
from models.schedule import (
    ChangeRoomRequest,
    CourseAssignment,
    RescheduleRequest,
    ScheduledEvent,
    ScheduleRequest,
    ScheduleResult,
    ProfessionalScheduleResult,
)

__all__ = [
    "Room",
    "Event",
    "EventId",
    "EventStatus",
    "EventType",
    "TeacherRef",
    "ConflictGroup",
    "ConflictRecord",
    "ConflictType",
    "Course",
    "CourseSelection",
    "ChangeRoomRequest",
    "CourseAssignment",
    "RescheduleRequest",
    "ScheduledEvent",
    "ScheduleRequest",
    "ScheduleResult",
    "ProfessionalScheduleResult",
]
