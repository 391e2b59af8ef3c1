from fastapi.testclient import TestClient

from api.server import app

client = TestClient(app)

MANILA = {"start": "09:00", "end": "18:00", "timezone": "Asia/Manila"}


def test_index():
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.text


def test_health():
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
    assert response.json()["timestamp"]


def test_calculate_time():
    response = client.post("/api/calculate-time", json={
        "punchIn": "2025-10-01T09:15:00+08:00",
        "punchOut": "2025-10-01T19:30:00+08:00",
        "schedule": MANILA,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["totalWorkedMinutes"] == 615
    assert data["regularHours"] == "8.75"
    assert data["overtimeHours"] == "1.50"
    assert data["nightDiffHours"] == "0.00"
    assert data["lateMinutes"] == 15
    assert data["undertimeMinutes"] == 0
    assert data["shiftStart"].startswith("2025-10-01T01:00:00")
    assert data["shiftEnd"].startswith("2025-10-01T10:00:00")


def test_calculate_time_missing_punch_out():
    response = client.post("/api/calculate-time", json={
        "punchIn": "2025-10-01T09:15:00+08:00",
        "schedule": MANILA,
    })

    assert response.status_code == 400
    assert "punchOut" in response.json()["error"]


def test_calculate_time_missing_schedule_end():
    response = client.post("/api/calculate-time", json={
        "punchIn": "2025-10-01T09:15:00+08:00",
        "punchOut": "2025-10-01T19:30:00+08:00",
        "schedule": {"start": "09:00"},
    })

    assert response.status_code == 400
    assert "end" in response.json()["error"]


def test_calculate_time_batch():
    response = client.post("/api/calculate-time-batch", json={
        "attendanceRecords": [
            {"id": "a", "punchIn": "2025-10-01T09:00:00+08:00", "punchOut": "2025-10-01T18:00:00+08:00"},
            {"id": "b", "punchIn": "2025-10-02T09:00:00+08:00"},
            {"id": "c", "punchIn": "2025-10-03T21:00:00+08:00", "punchOut": "2025-10-04T07:00:00+08:00"},
        ],
        "schedule": MANILA,
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 3
    assert [d["id"] for d in data] == ["a", "b", "c"]
    assert data[0]["metrics"]["regularMinutes"] == 540
    assert data[0]["calculationError"] is None
    assert data[1]["metrics"] is None
    assert data[1]["calculationError"]
    assert data[2]["metrics"]["nightDiffMinutes"] == 480
    assert data[2]["calculationError"] is None


def test_calculate_time_batch_keeps_going_past_null_record():
    good = {"punchIn": "2025-10-01T09:00:00+08:00", "punchOut": "2025-10-01T18:00:00+08:00"}

    response = client.post("/api/calculate-time-batch", json={
        "attendanceRecords": [good, None, {"punchIn": {"x": 1}, "punchOut": "x"}, good],
        "schedule": MANILA,
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 4
    assert data[0]["metrics"]["regularMinutes"] == 540
    assert data[1]["metrics"] is None
    assert data[1]["calculationError"]
    assert data[2]["metrics"] is None
    assert data[2]["calculationError"]
    assert data[3]["metrics"]["regularMinutes"] == 540


def test_calculate_time_rejects_numeric_timestamp():
    response = client.post("/api/calculate-time", json={
        "punchIn": 1759280400,
        "punchOut": "2025-10-01T19:30:00+08:00",
        "schedule": MANILA,
    })

    assert response.status_code == 400
    assert "punchIn" in response.json()["error"]


def test_calculate_time_batch_bad_schedule():
    response = client.post("/api/calculate-time-batch", json={
        "attendanceRecords": [],
        "schedule": {"start": "09:00", "end": "18:00", "timezone": "Nowhere/Special"},
    })

    assert response.status_code == 400
    assert "timezone" in response.json()["error"]


def test_daily_summary():
    response = client.post("/api/daily-summary", json={
        "userId": "u1",
        "date": "2025-10-01",
        "records": [
            {"punchIn": "2025-10-01T09:15:00+08:00", "punchOut": "2025-10-01T12:00:00+08:00"},
            {"punchIn": "2025-10-01T13:00:00+08:00", "punchOut": "2025-10-01T19:30:00+08:00"},
            {"punchIn": "2025-10-01T20:00:00+08:00", "punchOut": "later"},
            None,
        ],
        "schedule": MANILA,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["data"]["userId"] == "u1"
    assert body["data"]["date"] == "2025-10-01"
    assert body["data"]["totalWorkedMinutes"] == 555
    assert body["data"]["totalWorkedHours"] == "9.25"
    assert body["data"]["overtimeMinutes"] == 90
    assert body["data"]["totalLateMinutes"] == 15 + 240
    assert len(body["errors"]) == 2


def test_weekly_summary():
    response = client.post("/api/weekly-summary", json={
        "date": "2025-10-01",
        "summaries": [
            {"userId": "u1", "date": "2025-09-29", "totalWorkedMinutes": 540, "regularMinutes": 540},
            {"userId": "u1", "date": "2025-10-01", "totalWorkedMinutes": 615, "regularMinutes": 525, "overtimeMinutes": 90},
            {"userId": "u1", "date": "2025-10-08", "totalWorkedMinutes": 540, "regularMinutes": 540},
        ],
    })

    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 1
    assert data[0]["weekStart"] == "2025-09-28"
    assert data[0]["days"] == 2
    assert data[0]["totalHours"] == "19.25"
    assert data[0]["overtimeHours"] == "1.50"
