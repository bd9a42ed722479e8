"""Tests für den HTTP-Client (requests.Session gemockt)."""

from unittest.mock import MagicMock

import pytest
import requests

from client.api import ApiClient
from client.errors import (
    ApiError,
    DuplicateRecordError,
    ServiceUnavailableError,
    UnauthorizedError,
)
from client.session import SessionContext
from models.conflict import ConflictType
from models.schedule import ChangeRoomRequest, RescheduleRequest
from selection.request_builder import IdListRequestBuilder, StructuredRequestBuilder

EVENT_JSON = {
    "id": 3,
    "type": "COURSE",
    "title": "Linear Algebra",
    "date": "2025-08-19",
    "startTime": "08:30",
    "endTime": "09:30",
    "teacher": {"id": 1, "name": "Dr. Smith"},
    "room": {"id": 6, "name": "E06", "capacity": 40},
}


def _response(status=200, body=None, text=None) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    if body is None and text is None:
        response.content = b""
        response.json.side_effect = ValueError("no body")
        response.text = ""
    elif body is not None:
        response.content = b"x"
        response.json.return_value = body
        response.text = str(body)
    else:
        response.content = text.encode()
        response.json.side_effect = ValueError("not json")
        response.text = text
    return response


@pytest.fixture
def http():
    return MagicMock()


@pytest.fixture
def session():
    return SessionContext(token="abc123")


@pytest.fixture
def client(http, session):
    return ApiClient("http://server/api/", session_context=session, timeout_seconds=5, http=http)


# ─── ANFRAGEN ─────────────────────────────────────────────────────────────────

class TestRequest:
    def test_auth_header_and_url(self, client, http):
        """Bearer-Token wird mitgesendet, Basis-URL ohne doppelten Slash."""
        http.request.return_value = _response(body=[])
        client.conflicts.get_all()
        args, kwargs = http.request.call_args
        assert args == ("GET", "http://server/api/conflicts")
        assert kwargs["headers"] == {"Authorization": "Bearer abc123"}
        assert kwargs["timeout"] == 5

    def test_no_token_no_auth_header(self, http):
        client = ApiClient("http://server/api", http=http)
        http.request.return_value = _response(body=[])
        client.rooms.get_all()
        assert http.request.call_args.kwargs["headers"] == {}

    def test_empty_body_returns_none(self, client, http):
        http.request.return_value = _response(status=204)
        assert client.request("POST", "/x") is None

    def test_transport_error(self, client, http):
        http.request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(ServiceUnavailableError):
            client.conflicts.get_all()

    def test_unauthorized_clears_session(self, client, http, session):
        """HTTP 401 → UnauthorizedError und Sitzung wird verworfen."""
        http.request.return_value = _response(status=401, body={"message": "expired"})
        with pytest.raises(UnauthorizedError) as exc:
            client.courses.get_all()
        assert exc.value.status_code == 401
        assert session.token is None
        assert not session.is_authenticated

    def test_duplicate_mapping(self, client, http):
        http.request.return_value = _response(
            status=409, body={"message": "Duplicate entry for conflict"})
        with pytest.raises(DuplicateRecordError) as exc:
            client.conflicts.detect()
        assert exc.value.status_code == 409

    def test_other_error_mapping(self, client, http):
        http.request.return_value = _response(status=500, text="Internal Server Error")
        with pytest.raises(ApiError) as exc:
            client.conflicts.detect()
        assert not isinstance(exc.value, DuplicateRecordError)
        assert exc.value.message == "Internal Server Error"
        assert exc.value.status_code == 500

    def test_400_without_duplicate_is_plain_error(self, client, http):
        http.request.return_value = _response(status=400, body={"message": "Bad date"})
        with pytest.raises(ApiError) as exc:
            client.events.reschedule(3, RescheduleRequest(
                date="x", start_time="10:00", end_time="11:00"))
        assert type(exc.value) is ApiError
        assert exc.value.message == "Bad date"


# ─── SERVICE-BEREICHE ─────────────────────────────────────────────────────────

class TestServiceApis:
    def test_conflicts_parsed(self, client, http):
        http.request.return_value = _response(body=[{
            "id": 1, "conflictType": "ROOM", "event1": EVENT_JSON,
            "event2": dict(EVENT_JSON, id=4), "description": "Room double booked",
        }])
        conflicts = client.conflicts.get_all()
        assert conflicts[0].conflict_type == ConflictType.ROOM
        assert [e.id for e in conflicts[0].events] == [3, 4]
        assert conflicts[0].event1.room.name == "E06"

    def test_preview_endpoint(self, client, http):
        http.request.return_value = _response(body=[])
        client.conflicts.preview()
        assert http.request.call_args.args == ("GET", "http://server/api/conflicts/preview")

    def test_reschedule_payload(self, client, http):
        http.request.return_value = _response(body=dict(EVENT_JSON, date="2025-08-20"))
        event = client.events.reschedule(3, RescheduleRequest(
            date="2025-08-20", start_time="10:00", end_time="11:00"))
        args, kwargs = http.request.call_args
        assert args == ("PUT", "http://server/api/events/3/reschedule")
        assert kwargs["json"] == {"date": "2025-08-20", "startTime": "10:00", "endTime": "11:00"}
        assert event.date == "2025-08-20"

    def test_change_room_payload(self, client, http):
        http.request.return_value = _response(body=EVENT_JSON)
        client.events.change_room(3, ChangeRoomRequest(room_id=7))
        args, kwargs = http.request.call_args
        assert args == ("PUT", "http://server/api/events/3/change-room")
        assert kwargs["json"] == {"roomId": 7}

    def test_courses_parsed(self, client, http):
        http.request.return_value = _response(body=[{
            "id": 1, "name": "Linear Algebra", "subject": "Math",
            "durationHours": 2, "sessionsPerWeek": 2, "minCapacity": 30,
        }])
        course = client.courses.get_all()[0]
        assert course.min_capacity == 30
        assert course.max_capacity is None

    def test_courses_nullable_counters(self, client, http):
        """Fehlende oder null-Werte bei sessionsPerWeek/minCapacity → Defaults."""
        http.request.return_value = _response(body=[
            {"id": 1, "name": "Optics", "subject": "Physics", "durationHours": 2,
             "sessionsPerWeek": None, "minCapacity": None},
            {"id": 2, "name": "Mechanics", "subject": "Physics", "durationHours": 3},
        ])
        courses = client.courses.get_all()
        assert [c.sessions_per_week for c in courses] == [1, 1]
        assert courses[0].min_capacity == 0

    def test_weekly_schedule_create_professional(self, client, http):
        """"professional"-Antwort: Events mit Datum/Uhrzeit plus nicht eingeplante Kurse."""
        body = {
            "scheduledEvents": [dict(EVENT_JSON, startTime="08:30:00", endTime="10:30:00")],
            "unscheduledCourses": ["Course 2: no room available"],
            "message": "1 of 2 courses scheduled",
            "success": True,
        }
        http.request.return_value = _response(body=body)
        data = client.weekly_schedule.create("/weekly-schedule/create-professional", [1, 2])
        args, kwargs = http.request.call_args
        assert args == ("POST", "http://server/api/weekly-schedule/create-professional")
        assert kwargs["json"] == [1, 2]

        result = IdListRequestBuilder().parse_result(data, [1, 2])
        assert result.total_courses == 2
        assert result.successful_courses == 1
        assert result.failed_courses == 1
        assert result.is_partial
        assert result.errors == ["Course 2: no room available"]
        event = result.scheduled_events[0]
        assert event.course_name == "Linear Algebra"
        assert event.start_date_time == "2025-08-19T08:30:00"
        assert event.room.name == "E06"

    def test_weekly_schedule_create_structured(self, client, http):
        http.request.return_value = _response(body={
            "weekStartDate": "2025-08-18", "weekEndDate": "2025-08-22",
            "totalCourses": 1, "successfulCourses": 1, "failedCourses": 0,
            "success": True,
            "scheduledEvents": [{
                "courseId": 1, "courseName": "Linear Algebra",
                "startDateTime": "2025-08-18T08:30:00",
                "endDateTime": "2025-08-18T10:30:00",
            }],
        })
        payload = {"weekStartDate": "2025-08-18",
                   "courses": [{"courseId": 1, "priority": 1, "studentCount": 20}]}
        data = client.weekly_schedule.create("/weekly-schedule/create", payload)
        result = StructuredRequestBuilder().parse_result(data, payload)
        assert result.success
        assert not result.is_partial
        assert result.scheduled_events[0].start_date_time == "2025-08-18T08:30:00"
