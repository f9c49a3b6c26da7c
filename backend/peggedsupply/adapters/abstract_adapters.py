from abc import ABC, abstractmethod


class AbstractAdapter(ABC):
    """Extract data from a source and load it into a store. name is used in all status prints."""

    def __init__(self, name: str, adapter_params: dict, db_connector):
        self.name = name
        self.adapter_params = adapter_params
        self.db_connector = db_connector

    @abstractmethod
    def extract(self, load_params: dict):
        raise NotImplementedError

    @abstractmethod
    def load(self, data):
        raise NotImplementedError
