from common.log import get_logger, info, debug, warning
from common.utils.firebase import get_db as get_firestore_client
from model.opportunity import Opportunity
from model.volunteer import Volunteer
from db.interface import DatabaseInterface

logger = get_logger("firestore")

VOLUNTEERS_COLLECTION = 'volunteers'
OPPORTUNITIES_COLLECTION = 'opportunities'
SETTINGS_COLLECTION = 'settings'
TRAINING_CATALOG_DOC = 'training_catalog'

def convert_to_entity(doc, cls):
    d = doc.to_dict() or {}
    d['id'] = doc.id
    return cls.deserialize(d)


class FirestoreDatabaseInterface(DatabaseInterface):
    def get_db(self):
        return get_firestore_client()

    # ----------------------- Volunteers -------------------------------------

    def fetch_volunteer_by_id(self, volunteer_id):
        debug(logger, "Fetching volunteer", volunteer_id=volunteer_id)
        doc = self.get_db().collection(VOLUNTEERS_COLLECTION).document(volunteer_id).get()
        if not doc.exists:
            warning(logger, "Volunteer not found", volunteer_id=volunteer_id)
            return None
        return convert_to_entity(doc, Volunteer)

    def fetch_volunteers(self, role=None):
        query = self.get_db().collection(VOLUNTEERS_COLLECTION)
        if role:
            query = query.where('role', '==', role)
        volunteers = [convert_to_entity(doc, Volunteer) for doc in query.stream() if doc.exists]
        info(logger, "Fetched volunteers", role=role, count=len(volunteers))
        return volunteers

    # ----------------------- Opportunities ----------------------------------

    def fetch_opportunity_by_id(self, opportunity_id):
        debug(logger, "Fetching opportunity", opportunity_id=opportunity_id)
        doc = self.get_db().collection(OPPORTUNITIES_COLLECTION).document(opportunity_id).get()
        if not doc.exists:
            warning(logger, "Opportunity not found", opportunity_id=opportunity_id)
            return None
        return convert_to_entity(doc, Opportunity)

    # ----------------------- Settings ---------------------------------------

    def fetch_training_catalog_config(self):
        doc = self.get_db().collection(SETTINGS_COLLECTION).document(TRAINING_CATALOG_DOC).get()
        if not doc.exists:
            return None
        return doc.to_dict()
