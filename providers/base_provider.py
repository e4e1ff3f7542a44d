from abc import ABC, abstractmethod


class BaseEventProvider(ABC):
    """
    Read-only source of events for the layout engine.

    Every event store the views read from implements this contract. Writing,
    syncing and recurrence expansion stay on the store side.
    """

    name = "BaseEventProvider"

    @abstractmethod
    def get_events(self, start_date, end_date):
        """
        Return the events overlapping the inclusive date period.
        Return value: [ Event or event record dict, ... ]
        """
        pass

    @abstractmethod
    def search_events(self, query):
        """
        Return every event whose title matches the query.
        Return value: [ Event, ... ]
        """
        pass
