from db.interface import DatabaseInterface
from db.firestore import FirestoreDatabaseInterface

db: DatabaseInterface = FirestoreDatabaseInterface()

# Volunteers
def fetch_volunteer_by_id(volunteer_id):
    return db.fetch_volunteer_by_id(volunteer_id)

def fetch_volunteers(role=None):
    return db.fetch_volunteers(role)

# Opportunities
def fetch_opportunity_by_id(opportunity_id):
    return db.fetch_opportunity_by_id(opportunity_id)

# Settings
def fetch_training_catalog_config():
    return db.fetch_training_catalog_config()
