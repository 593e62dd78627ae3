import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from pymongo import ASCENDING, DESCENDING

from database import (get_db, CLIENTS, PROJECTS, TASKS, INVOICES, TIME_ENTRIES,
                      RESOURCES, FILE_ANALYSES)
from schemas.projects import PRIORITIES

PRIORITY_RANK = {priority: rank for rank, priority in enumerate(PRIORITIES)}


def require_db():
    """Database handle for endpoints that cannot work without storage"""
    db = get_db()
    if db is None:
        raise HTTPException(status_code=503, detail="Database not configured")
    return db


def utcnow() -> datetime:
    # pymongo hands back naive UTC datetimes; store them the same way
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def to_object_id(value: str, name: str = "document") -> ObjectId:
    # ObjectId(None) would mint a fresh id
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"Invalid {name} id")
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail=f"Invalid {name} id")


def serialize(value):
    """Make a MongoDB document JSON friendly (ObjectId -> str, datetime -> ISO)"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo:
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return value.isoformat() + "Z"
    if isinstance(value, dict):
        return {k: serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize(v) for v in value]
    return value


def mongo_day_of_week(value: datetime) -> int:
    """Same numbering as MongoDB's $dayOfWeek: 1 = Sunday .. 7 = Saturday"""
    return value.isoweekday() % 7 + 1


# ============== CLIENTS ==============

def list_clients():
    db = require_db()
    return [serialize(c) for c in db[CLIENTS].find({})]


def add_client(name: str, email: str):
    db = require_db()
    client = {
        "name": name,
        "email": email,
        "status": "active",
        "projects": [],
        "createdAt": utcnow(),
    }
    result = db[CLIENTS].insert_one(client)
    client["_id"] = result.inserted_id
    return serialize(client)


def set_client_status(client_id: ObjectId, status: str):
    """Returns (matched, modified) counts of the update"""
    db = require_db()
    existing = db[CLIENTS].find_one({"_id": client_id}, {"status": 1})
    if existing is None:
        return 0, 0
    # updatedAt would always count as a change, so compare the status itself
    if existing.get("status") == status:
        return 1, 0
    result = db[CLIENTS].update_one(
        {"_id": client_id},
        {"$set": {"status": status, "updatedAt": utcnow()}}
    )
    return result.matched_count, result.modified_count


def get_client(client_id: ObjectId):
    db = require_db()
    client = db[CLIENTS].find_one({"_id": client_id})
    return serialize(client) if client else None


def delete_client(client_id: ObjectId) -> bool:
    db = require_db()
    return db[CLIENTS].delete_one({"_id": client_id}).deleted_count > 0


# ============== PROJECTS ==============

def list_projects(client_id: Optional[ObjectId] = None):
    db = require_db()
    if client_id is not None:
        cursor = db[PROJECTS].find({"clientId": client_id})
    else:
        cursor = db[PROJECTS].find({}).sort("createdAt", DESCENDING)
    return [serialize(p) for p in cursor]


def add_project(data: dict):
    """Insert a project and link it from its client's projects list"""
    db = require_db()
    project = dict(data)
    result = db[PROJECTS].insert_one(project)
    project["_id"] = result.inserted_id

    if project.get("clientId") is not None:
        db[CLIENTS].update_one(
            {"_id": project["clientId"]},
            {"$push": {"projects": result.inserted_id}}
        )
    return serialize(project)


def update_project_progress(project_id: ObjectId, progress: int):
    db = require_db()
    result = db[PROJECTS].update_one(
        {"_id": project_id},
        {"$set": {"progress": progress, "updatedAt": utcnow()}}
    )
    return result.matched_count


# ============== TASKS ==============

def list_tasks():
    db = require_db()
    return [serialize(t) for t in db[TASKS].find({}).sort("dueDate", ASCENDING)]


def add_task(data: dict):
    db = require_db()
    task = dict(data)
    result = db[TASKS].insert_one(task)
    task["_id"] = result.inserted_id
    return serialize(task)


def set_task_status(task_id: ObjectId, status: str) -> int:
    db = require_db()
    result = db[TASKS].update_one(
        {"_id": task_id},
        {"$set": {"status": status, "updatedAt": utcnow()}}
    )
    return result.matched_count


def start_task(task_id: ObjectId) -> int:
    db = require_db()
    now = utcnow()
    result = db[TASKS].update_one(
        {"_id": task_id},
        {"$set": {"status": "in_progress", "startTime": now, "updatedAt": now}}
    )
    return result.matched_count


# ============== INVOICES ==============

def list_invoices():
    db = require_db()
    return [serialize(i) for i in db[INVOICES].find({}).sort("createdAt", DESCENDING)]


def add_invoice(data: dict):
    db = require_db()
    invoice = dict(data)
    result = db[INVOICES].insert_one(invoice)
    invoice["_id"] = result.inserted_id
    return serialize(invoice)


def set_invoice_status(invoice_id: ObjectId, status: str) -> int:
    db = require_db()
    result = db[INVOICES].update_one({"_id": invoice_id}, {"$set": {"status": status}})
    return result.matched_count


# ============== TIME TRACKING ==============

def add_time_entry(data: dict) -> str:
    db = require_db()
    result = db[TIME_ENTRIES].insert_one(dict(data))
    return str(result.inserted_id)


def recent_time_entries(limit: int = 10):
    db = require_db()
    cursor = db[TIME_ENTRIES].find({}).sort("date", DESCENDING).limit(limit)
    return [serialize(e) for e in cursor]


def weekly_time_summary(now: Optional[datetime] = None):
    """Hours and distinct projects per weekday over the last seven days"""
    db = require_db()
    now = now or utcnow()
    one_week_ago = now - timedelta(days=7)

    days = {}
    for entry in db[TIME_ENTRIES].find({"date": {"$gte": one_week_ago}}):
        day = mongo_day_of_week(entry["date"])
        bucket = days.setdefault(day, {"seconds": 0, "projects": set()})
        bucket["seconds"] += entry.get("duration") or 0
        if entry.get("projectId") is not None:
            bucket["projects"].add(str(entry["projectId"]))

    return [
        {
            "day": day,
            "hours": bucket["seconds"] / 3600,
            "projectCount": len(bucket["projects"]),
        }
        for day, bucket in sorted(days.items())
    ]


# ============== DASHBOARD ==============

def _sum_field(db, collection: str, field: str, match: Optional[dict] = None):
    pipeline = []
    if match:
        pipeline.append({"$match": match})
    pipeline.append({"$group": {"_id": None, "total": {"$sum": f"${field}"}}})
    rows = list(db[collection].aggregate(pipeline))
    return rows[0]["total"] if rows else 0


def upcoming_deadlines(db, now: datetime, limit: int = 5):
    """Open tasks due from now on, soonest first, higher priority first on the same day"""
    query = {"status": {"$ne": "completed"}, "dueDate": {"$gte": now}}
    tasks = list(db[TASKS].find(query).sort("dueDate", ASCENDING).limit(limit))
    if len(tasks) == limit:
        # Priority is stored as a word, so refetch everything tied with the cutoff and rank here
        query["dueDate"] = {"$gte": now, "$lte": tasks[-1]["dueDate"]}
        tasks = list(db[TASKS].find(query))
    tasks.sort(key=lambda t: (t["dueDate"], -PRIORITY_RANK.get(t.get("priority"), 1)))
    return tasks[:limit]


def dashboard_metrics(now: Optional[datetime] = None):
    db = require_db()
    now = now or utcnow()

    total_earnings = _sum_field(db, INVOICES, "amount", {"status": "paid"})
    total_seconds = _sum_field(db, TIME_ENTRIES, "duration")

    current_projects = db[PROJECTS].find({"status": "active"}).sort("dueDate", ASCENDING).limit(5)

    return {
        "totalEarnings": total_earnings or 0,
        "activeProjects": db[PROJECTS].count_documents({"status": "active"}),
        # Halves round up
        "hoursWorked": math.floor((total_seconds or 0) / 3600 + 0.5),
        "activeClients": db[CLIENTS].count_documents({"status": "active"}),
        "currentProjects": [serialize(p) for p in current_projects],
        "upcomingDeadlines": [serialize(t) for t in upcoming_deadlines(db, now)],
    }


# ============== RESOURCES ==============

def list_resources():
    db = require_db()
    return [serialize(r) for r in db[RESOURCES].find({})]


def add_resource(data: dict) -> str:
    db = require_db()
    result = db[RESOURCES].insert_one(dict(data))
    return str(result.inserted_id)


# ============== FILE ANALYSES ==============

def save_file_analysis(file_name: str, file_size: Optional[int], analysis: dict):
    """Save a document analysis to the database"""
    db = get_db()
    if db is None:
        return None  # No database configured

    try:
        result = db[FILE_ANALYSES].insert_one({
            "fileName": file_name,
            "fileSize": file_size,
            "analysis": analysis,
            "timestamp": utcnow(),
        })
        return str(result.inserted_id)
    except Exception as e:
        print(f"Error saving file analysis: {e}")
        return None


def list_file_analyses(limit: int = 50):
    db = require_db()
    cursor = db[FILE_ANALYSES].find({}).sort("timestamp", DESCENDING).limit(limit)
    return [serialize(a) for a in cursor]
