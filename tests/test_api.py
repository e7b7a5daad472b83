import pytest

from attendance_payroll.container import build_container
from attendance_payroll.main import create_app


@pytest.fixture
def client(repo, clock):
    container = build_container(employees_repo=repo, clock=clock)
    app = create_app("attendance_payroll.settings.testing", container=container)
    return app.test_client()


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["success"] is True


def test_checkin_break_checkout_flow(client, clock):
    clock.at(9, 20)
    resp = client.post("/employees/e1/checkin", json={"latitude": 12.9, "longitude": 77.6, "address": "Gate 2"})
    body = resp.get_json()
    assert resp.status_code == 200
    assert body["message"] == "Check-in successful. Late by 20 minutes"
    assert body["data"]["employeeId"] == "EMP-e1"
    assert body["data"]["status"] == "late"
    assert body["data"]["checkInLocation"]["address"] == "Gate 2"
    assert body["data"]["workLocation"] == "dining"

    clock.at(13, 0)
    resp = client.post("/employees/e1/break/start", json={"type": "lunch"})
    assert resp.get_json()["message"] == "Lunch break started"

    clock.at(13, 30)
    resp = client.post("/employees/e1/break/end")
    assert resp.get_json()["data"]["totalBreakTime"] == 30

    clock.at(17, 0)
    resp = client.post("/employees/e1/checkout")
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert data["status"] == "early-leave"
    assert data["hoursWorked"] == 7.17
    assert data["earlyLeaveMinutes"] == 60


def test_errors_map_to_status_codes(client, clock):
    clock.at(9, 0)

    resp = client.post("/employees/ghost/checkin", json={})
    assert resp.status_code == 404
    assert resp.get_json() == {"success": False, "message": "Employee not found", "error": "NotFound"}

    resp = client.post("/employees/e1/checkout")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "NotCheckedIn"

    client.post("/employees/e1/checkin", json={})
    resp = client.post("/employees/e1/checkin", json={})
    assert resp.get_json()["error"] == "AlreadyCheckedIn"

    resp = client.post("/employees/e1/checkin", json={"override": "false"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidInput"

    resp = client.post("/employees/e1/checkin", json={"override": True})
    assert resp.status_code == 200

    resp = client.post("/employees/e1/break/start", json={"type": "nap"})
    assert resp.get_json()["error"] == "InvalidInput"


def test_bulk_checkin(client, clock):
    clock.at(9, 0)

    resp = client.post(
        "/employees/bulk/checkin",
        json={"employeeIds": ["e1", "e3", "ghost"], "location": {"latitude": 1, "longitude": 2}},
    )

    summary = resp.get_json()["data"]["summary"]
    assert summary == {"total": 3, "successful": 1, "failed": 2, "successRate": 33}

    resp = client.post("/employees/bulk/checkin", json={"employeeIds": []})
    assert resp.status_code == 400


def test_today_and_employee_attendance(client, clock):
    clock.at(9, 0)
    client.post("/employees/e2/checkin", json={})

    today = client.get("/employees/attendance/today").get_json()["data"]
    assert today["summary"]["present"] == 1
    assert today["summary"]["total"] == 2

    resp = client.get("/employees/e2/attendance")
    data = resp.get_json()["data"]
    assert data["period"] == "10/2026"
    assert data["presentDays"] == 1
    assert data["attendance"][0]["status"] == "present"

    resp = client.get("/employees/e2/attendance?startDate=2026-10-14")
    assert resp.status_code == 400

    resp = client.get("/employees/e2/attendance?startDate=2026-10-15&endDate=2026-10-01")
    assert resp.get_json()["error"] == "InvalidPeriod"


def test_payslip_routes(client):
    resp = client.get("/employees/e1/salary/13/2026")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "InvalidPeriod"

    resp = client.get("/employees/ghost/salary/9/2026")
    assert resp.status_code == 404

    resp = client.get("/employees/e1/salary/9/2026")
    body = resp.get_json()
    assert resp.status_code == 200
    # no attendance in September: 30 absent days
    assert body["data"]["period"]["workingDays"] == 30
    assert body["data"]["netSalary"] == 30000 + 1800 - 4125

    summary = client.get("/employees/salary/summary/9/2026?department=Service").get_json()["data"]
    assert summary["summary"]["totalEmployees"] == 1


def test_analytics_routes(client):
    resp = client.get("/employees/stats/attendance?month=9&year=2026")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["totalEmployees"] == 2

    resp = client.get("/employees/stats/attendance?month=abc")
    assert resp.get_json()["error"] == "InvalidInput"

    resp = client.get("/employees/reports/comprehensive?startDate=2026-09-01")
    assert resp.status_code == 400

    resp = client.get("/employees/reports/comprehensive?startDate=2026-09-01&endDate=2026-09-30&reportType=detailed")
    data = resp.get_json()["data"]
    assert resp.status_code == 200
    assert len(data["employeeDetails"]) == 2

    resp = client.get("/employees/reports/comprehensive?startDate=2026-09-01&endDate=2026-09-30&reportType=pdf")
    assert resp.get_json()["error"] == "InvalidInput"
