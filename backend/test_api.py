"""
Ziio API Test Suite
Tests the workspace endpoints (clients, projects, tasks, invoices, time
tracking, dashboard, resources, stored analyses) against an in-memory MongoDB
"""

from datetime import datetime, timedelta, timezone

from bson import ObjectId

from database import CLIENTS, PROJECTS, TASKS, INVOICES, TIME_ENTRIES
from services.db_ops import mongo_day_of_week, utcnow

MISSING_ID = str(ObjectId())

SAMPLE_ANALYSIS = {
    "documentContext": {"type": "Assignment", "subject": "Marketing", "level": "Undergraduate"},
    "summary": {"overview": "Brief for a market research report on plant-based snacks."}
}


def iso(value: datetime) -> str:
    return value.replace(tzinfo=timezone.utc).isoformat()


def create_client(client, name="Brooklyn Roasting Company", email="ops@brooklynroasting.com"):
    response = client.post("/api/clients", json={"name": name, "email": email})
    assert response.status_code == 200
    return response.json()


def create_project(client, client_id, **fields):
    body = {"name": "Website redesign", "clientId": client_id, **fields}
    response = client.post("/api/projects", json=body)
    assert response.status_code == 200
    return response.json()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


# ============== CLIENTS ==============

def test_create_and_list_clients(client):
    created = create_client(client)
    assert created["status"] == "active"
    assert created["projects"] == []
    assert created["createdAt"].endswith("Z")
    assert ObjectId.is_valid(created["_id"])

    clients = client.get("/api/clients").json()
    assert [c["_id"] for c in clients] == [created["_id"]]


def test_create_client_missing_email(client):
    response = client.post("/api/clients", json={"name": "Spoke & Chain"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"
    assert response.json()["details"]


def test_update_client_status(client):
    created = create_client(client)

    response = client.patch(f"/api/clients/{created['_id']}", json={"status": "inactive"})
    assert response.status_code == 200
    assert response.json()["status"] == "inactive"
    assert "updatedAt" in response.json()


def test_update_client_status_unchanged(client):
    created = create_client(client)
    response = client.patch(f"/api/clients/{created['_id']}", json={"status": "active"})
    assert response.status_code == 400
    assert response.json() == {"error": "No changes made"}


def test_update_client_status_invalid(client):
    created = create_client(client)
    for body in ({"status": "archived"}, {}):
        response = client.patch(f"/api/clients/{created['_id']}", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid status value"}


def test_update_missing_client(client):
    response = client.patch(f"/api/clients/{MISSING_ID}", json={"status": "inactive"})
    assert response.status_code == 404
    assert response.json() == {"error": "Client not found"}


def test_malformed_client_id(client):
    response = client.patch("/api/clients/not-an-id", json={"status": "inactive"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid client id"}


def test_delete_client(client):
    created = create_client(client)
    response = client.delete(f"/api/clients/{created['_id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True}

    response = client.delete(f"/api/clients/{created['_id']}")
    assert response.status_code == 404
    assert response.json() == {"error": "Client not found"}


def test_no_database_configured(no_db_client):
    response = no_db_client.get("/api/clients")
    assert response.status_code == 503
    assert response.json() == {"error": "Database not configured"}


# ============== PROJECTS ==============

def test_create_project_defaults(client, db):
    owner = create_client(client)
    project = create_project(client, owner["_id"])

    assert project["status"] == "active"
    assert project["progress"] == 0
    assert project["description"] == ""
    assert project["dueDate"] is None
    assert project["priority"] == "medium"
    assert project["tags"] == []
    assert project["startDate"]
    assert project["clientId"] == owner["_id"]

    stored_client = db[CLIENTS].find_one({"_id": ObjectId(owner["_id"])})
    assert stored_client["projects"] == [ObjectId(project["_id"])]


def test_list_projects_by_client(client):
    first = create_client(client)
    second = create_client(client, name="Fixie Bike Repair", email="hi@spokeandchain.com")
    create_project(client, first["_id"], name="Menu photography")
    create_project(client, second["_id"], name="Frame catalogue", priority="high", tags=["print"])

    projects = client.get("/api/projects", params={"clientId": second["_id"]}).json()
    assert [p["name"] for p in projects] == ["Frame catalogue"]
    assert projects[0]["tags"] == ["print"]

    assert len(client.get("/api/projects").json()) == 2


def test_create_project_invalid_progress(client):
    owner = create_client(client)
    response = client.post("/api/projects", json={"name": "X", "clientId": owner["_id"], "progress": 140})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request body"


def test_create_project_rejects_unknown_status_and_priority(client, db):
    owner = create_client(client)
    for fields in ({"status": "bogus"}, {"priority": "urgent"}):
        response = client.post("/api/projects", json={"name": "X", "clientId": owner["_id"], **fields})
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"
    assert db[PROJECTS].count_documents({}) == 0


# ============== TASKS ==============

def test_tasks_ordered_by_due_date(client):
    project_id = MISSING_ID
    later = client.post("/api/tasks", json={
        "title": "Send final files", "projectId": project_id, "dueDate": "2026-03-10T12:00:00Z"
    }).json()
    sooner = client.post("/api/tasks", json={
        "title": "Draft moodboard", "projectId": project_id, "dueDate": "2026-03-01T12:00:00Z"
    }).json()

    assert sooner["status"] == "pending"
    assert sooner["priority"] == "medium"
    assert sooner["description"] == ""

    tasks = client.get("/api/tasks").json()
    assert [t["_id"] for t in tasks] == [sooner["_id"], later["_id"]]


def test_task_requires_due_date(client):
    response = client.post("/api/tasks", json={"title": "No deadline", "projectId": MISSING_ID})
    assert response.status_code == 400


def test_create_task_rejects_unknown_status_and_priority(client, db):
    for fields in ({"status": "blocked"}, {"priority": "urgent"}):
        response = client.post("/api/tasks", json={
            "title": "Draft moodboard", "projectId": MISSING_ID, "dueDate": "2026-03-01T12:00:00Z", **fields
        })
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request body"
    assert db[TASKS].count_documents({}) == 0


def test_update_task_status(client, db):
    task = client.post("/api/tasks", json={
        "title": "Draft moodboard", "projectId": MISSING_ID, "dueDate": "2026-03-01T12:00:00Z"
    }).json()

    response = client.patch(f"/api/tasks/{task['_id']}", json={"status": "completed"})
    assert response.status_code == 200
    assert response.json() == {"success": True}

    stored = db[TASKS].find_one({"_id": ObjectId(task["_id"])})
    assert stored["status"] == "completed"
    assert "updatedAt" in stored

    response = client.patch(f"/api/tasks/{MISSING_ID}", json={"status": "completed"})
    assert response.status_code == 404
    assert response.json() == {"error": "Task not found"}


# ============== INVOICES ==============

def test_invoice_lifecycle(client, db):
    owner = create_client(client)
    project = create_project(client, owner["_id"])

    invoice = client.post("/api/invoices", json={
        "clientId": owner["_id"], "projectId": project["_id"],
        "amount": 1250.5, "dueDate": "2026-04-01T00:00:00Z"
    }).json()
    assert invoice["status"] == "draft"
    assert invoice["amount"] == 1250.5

    response = client.patch("/api/invoices", json={"invoiceId": invoice["_id"], "status": "paid"})
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert db[INVOICES].find_one({"_id": ObjectId(invoice["_id"])})["status"] == "paid"

    # Same status again is still a match, not a 404
    response = client.patch("/api/invoices", json={"invoiceId": invoice["_id"], "status": "paid"})
    assert response.status_code == 200


def test_update_missing_invoice(client):
    response = client.patch("/api/invoices", json={"invoiceId": MISSING_ID, "status": "sent"})
    assert response.status_code == 404
    assert response.json() == {"error": "Invoice not found"}


def test_update_invoice_bad_status(client):
    response = client.patch("/api/invoices", json={"invoiceId": MISSING_ID, "status": "refunded"})
    assert response.status_code == 400


# ============== TIME TRACKING ==============

def test_log_time_entry(client, db):
    response = client.post("/api/time-tracking", json={
        "projectId": MISSING_ID, "task": "Logo sketches", "duration": 1800,
        "startTime": "09:00", "endTime": "09:30"
    })
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    stored = db[TIME_ENTRIES].find_one({"_id": ObjectId(body["id"])})
    assert stored["status"] == "completed"
    assert isinstance(stored["date"], datetime)


def test_weekly_summary(client):
    yesterday = utcnow() - timedelta(days=1)
    project_a, project_b = str(ObjectId()), str(ObjectId())
    entries = [
        {"projectId": project_a, "task": "Research", "duration": 3600, "date": iso(yesterday)},
        {"projectId": project_a, "task": "Drafting", "duration": 1800, "date": iso(yesterday)},
        {"projectId": project_b, "task": "Call", "duration": 900, "date": iso(utcnow() - timedelta(days=3))},
        {"projectId": project_b, "task": "Old work", "duration": 7200, "date": iso(utcnow() - timedelta(days=10))},
    ]
    for entry in entries:
        assert client.post("/api/time-tracking", json=entry).status_code == 200

    summary = client.get("/api/time-tracking/weekly").json()
    by_day = {row["day"]: row for row in summary}

    assert len(summary) == 2
    assert [row["day"] for row in summary] == sorted(by_day)
    yesterday_row = by_day[mongo_day_of_week(yesterday)]
    assert yesterday_row["hours"] == 1.5
    assert yesterday_row["projectCount"] == 1


def test_recent_time_entries(client):
    for days in range(5):
        client.post("/api/time-tracking", json={
            "task": f"Entry {days}", "duration": 60, "date": iso(utcnow() - timedelta(days=days))
        })

    recent = client.get("/api/time-tracking/recent", params={"limit": 3}).json()
    assert [e["task"] for e in recent] == ["Entry 0", "Entry 1", "Entry 2"]


# ============== DASHBOARD ==============

def seed_dashboard(db):
    now = utcnow()
    client_id = db[CLIENTS].insert_one({"name": "Acme", "email": "a@acme.io", "status": "active"}).inserted_id
    db[CLIENTS].insert_one({"name": "Old Co", "email": "o@old.co", "status": "inactive"})

    for amount, status in ((500, "paid"), (250, "paid"), (100, "draft")):
        db[INVOICES].insert_one({"clientId": client_id, "amount": amount, "status": status})

    db[TIME_ENTRIES].insert_many([{"duration": 5400, "date": now}, {"duration": 1800, "date": now}])

    for i in range(6):
        db[PROJECTS].insert_one({"name": f"Active {i}", "status": "active", "dueDate": now + timedelta(days=10 - i)})
    db[PROJECTS].insert_one({"name": "Paused", "status": "paused", "dueDate": now})

    due = now + timedelta(days=2)
    db[TASKS].insert_many([
        {"title": "Low priority", "status": "pending", "priority": "low", "dueDate": due},
        {"title": "High priority", "status": "pending", "priority": "high", "dueDate": due},
        {"title": "Done already", "status": "completed", "priority": "high", "dueDate": due},
        {"title": "Overdue", "status": "pending", "priority": "high", "dueDate": now - timedelta(days=1)},
        {"title": "Tomorrow", "status": "in_progress", "priority": "medium", "dueDate": now + timedelta(days=1)},
    ])


def test_dashboard_metrics(client, db):
    seed_dashboard(db)

    response = client.get("/api/dashboard")
    assert response.status_code == 200
    metrics = response.json()

    assert metrics["totalEarnings"] == 750
    assert metrics["activeProjects"] == 6
    assert metrics["hoursWorked"] == 2
    assert metrics["activeClients"] == 1
    assert [p["name"] for p in metrics["currentProjects"]] == [f"Active {i}" for i in (5, 4, 3, 2, 1)]
    assert [t["title"] for t in metrics["upcomingDeadlines"]] == ["Tomorrow", "High priority", "Low priority"]


def test_dashboard_empty(client):
    metrics = client.get("/api/dashboard").json()
    assert metrics["totalEarnings"] == 0
    assert metrics["hoursWorked"] == 0
    assert metrics["currentProjects"] == []


def test_dashboard_hours_round_half_up(client, db):
    db[TIME_ENTRIES].insert_one({"duration": 9000, "date": utcnow()})
    assert client.get("/api/dashboard").json()["hoursWorked"] == 3


def test_dashboard_deadline_ties_past_fifth_task(client, db):
    soon = utcnow() + timedelta(days=1)
    later = utcnow() + timedelta(days=3)
    db[TASKS].insert_many(
        [{"title": f"Low {i}", "status": "pending", "priority": "low", "dueDate": soon} for i in range(4)]
        + [{"title": f"Low later {i}", "status": "pending", "priority": "low", "dueDate": later} for i in range(3)]
        + [{"title": "High later", "status": "pending", "priority": "high", "dueDate": later}]
    )

    deadlines = client.get("/api/dashboard").json()["upcomingDeadlines"]
    assert [t["title"] for t in deadlines] == ["Low 0", "Low 1", "Low 2", "Low 3", "High later"]


def test_dashboard_actions(client, db):
    project_id = db[PROJECTS].insert_one({"name": "Brand kit", "status": "active", "progress": 10}).inserted_id
    task_id = db[TASKS].insert_one({"title": "Kickoff", "status": "pending"}).inserted_id

    response = client.post("/api/dashboard", json={
        "action": "updateProjectProgress", "data": {"id": str(project_id), "progress": 60}
    })
    assert response.json() == {"success": True}
    assert db[PROJECTS].find_one({"_id": project_id})["progress"] == 60

    response = client.post("/api/dashboard", json={"action": "startTask", "data": {"id": str(task_id)}})
    assert response.json() == {"success": True}
    task = db[TASKS].find_one({"_id": task_id})
    assert task["status"] == "in_progress"
    assert isinstance(task["startTime"], datetime)


def test_dashboard_invalid_action(client):
    response = client.post("/api/dashboard", json={"action": "archiveEverything", "data": {}})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid action"}


def test_dashboard_action_missing_project(client):
    response = client.post("/api/dashboard", json={
        "action": "updateProjectProgress", "data": {"id": MISSING_ID, "progress": 5}
    })
    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}


def test_dashboard_action_without_id(client):
    response = client.post("/api/dashboard", json={"action": "startTask", "data": {}})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid task id"}


# ============== RESOURCES ==============

def test_resources(client):
    response = client.post("/api/resources", json={
        "title": "Brand guidelines", "url": "https://example.com/brand.pdf", "category": "design"
    })
    assert response.status_code == 200
    resource_id = response.json()["id"]

    resources = client.get("/api/resources").json()
    assert resources[0]["_id"] == resource_id
    assert resources[0]["category"] == "design"


# ============== STORED FILE ANALYSES ==============

def test_store_and_list_file_analysis(client):
    response = client.post("/api/file-analysis", json={
        "fileName": "brief.pdf", "fileSize": 20480, "analysis": SAMPLE_ANALYSIS
    })
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True

    stored = client.get("/api/file-analysis").json()
    assert stored[0]["_id"] == body["id"]
    assert stored[0]["analysis"]["summary"]["overview"].startswith("Brief for")
    assert stored[0]["timestamp"].endswith("Z")


def test_store_file_analysis_without_database(no_db_client):
    response = no_db_client.post("/api/file-analysis", json={
        "fileName": "brief.pdf", "fileSize": 20480, "analysis": SAMPLE_ANALYSIS
    })
    assert response.status_code == 503
    assert response.json() == {"error": "Database not configured"}


def test_store_file_analysis_save_failure(client, monkeypatch):
    monkeypatch.setattr("routers.analysis.save_file_analysis", lambda *args: None)
    response = client.post("/api/file-analysis", json={
        "fileName": "brief.pdf", "fileSize": 20480, "analysis": SAMPLE_ANALYSIS
    })
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save file analysis"}