import json
import firebase_admin
from firebase_admin import credentials, firestore
from mockfirestore import MockFirestore
from . import safe_get_env_var
from common.log import get_logger, info, debug

logger = get_logger("firebase")

# Single client per process; Firestore clients pool their own connections
_firestore_client = None

def _initialize_firebase_app():
    # see if firebase_admin is already been initialized
    if firebase_admin._apps:
        return
    cert_env = json.loads(safe_get_env_var("FIREBASE_CERT_CONFIG", "{}"))
    cred = credentials.Certificate(cert_env)
    firebase_admin.initialize_app(credential=cred)
    info(logger, "Initialized Firebase Admin SDK")

def get_db():
    """
    Returns the shared Firestore client.

    Under ENVIRONMENT=test this is an in-process MockFirestore so tests never
    touch a real project.
    """
    global _firestore_client

    if _firestore_client is None:
        if safe_get_env_var("ENVIRONMENT") == "test":
            _firestore_client = MockFirestore()
            debug(logger, "Created MockFirestore client")
        else:
            _initialize_firebase_app()
            _firestore_client = firestore.client()
            debug(logger, "Created Firestore client")

    return _firestore_client

def reset_db():
    """Drop the cached client; the next get_db() call builds a fresh one."""
    global _firestore_client
    _firestore_client = None
