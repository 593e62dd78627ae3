from pymongo import MongoClient
from config import MONGODB_URI, DB_NAME

CLIENTS = "clients"
PROJECTS = "projects"
TASKS = "tasks"
INVOICES = "invoices"
TIME_ENTRIES = "time_entries"
RESOURCES = "resources"
FILE_ANALYSES = "file_analyses"

mongo_client = None
_db = None


def init_db(client=None):
    """Connect to MongoDB. A ready client (e.g. mongomock) can be passed in."""
    global mongo_client, _db
    if client is None and not MONGODB_URI:
        print("MONGODB_URI not set - running without database storage")
        mongo_client = None
        _db = None
        return False

    if client is None:
        client = MongoClient(MONGODB_URI, serverSelectionTimeoutMS=5000)
    mongo_client = client
    _db = client[DB_NAME]
    print(f"Database initialized successfully ({DB_NAME})")
    return True


def close_db():
    global mongo_client, _db
    if mongo_client is not None:
        mongo_client.close()
    mongo_client = None
    _db = None


def get_db():
    return _db
