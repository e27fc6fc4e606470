import abc

class DatabaseInterface(metaclass=abc.ABCMeta):
    @classmethod
    def __subclasshook__(cls, __subclass: type) -> bool:
        return (hasattr(__subclass, 'fetch_volunteer_by_id') and
                callable(__subclass.fetch_volunteer_by_id) and
                hasattr(__subclass, 'fetch_volunteers') and
                callable(__subclass.fetch_volunteers) and
                hasattr(__subclass, 'fetch_opportunity_by_id') and
                callable(__subclass.fetch_opportunity_by_id) and
                hasattr(__subclass, 'fetch_training_catalog_config') and
                callable(__subclass.fetch_training_catalog_config))

    @abc.abstractmethod
    def get_db(self):
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_volunteer_by_id(self, volunteer_id):
        """Volunteer or None"""
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_volunteers(self, role=None):
        """All volunteers, optionally only those with the given role"""
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_opportunity_by_id(self, opportunity_id):
        """Opportunity or None"""
        raise NotImplementedError

    @abc.abstractmethod
    def fetch_training_catalog_config(self):
        """Raw settings dict, or None when no override is stored"""
        raise NotImplementedError
