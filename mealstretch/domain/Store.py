"""Store domain entity: a grocery store near the requester."""
from typing import Optional


class Store:
    def __init__(self, id: str = "", name: str = "", address: str = "", distance: str = "",
                 lat: Optional[float] = None, lng: Optional[float] = None, miles: Optional[float] = None):
        self.id = id
        self.name = name
        self.address = address
        self.distance = distance
        self.lat = lat
        self.lng = lng
        # raw distance, used for ordering only
        self.miles = miles

    def __str__(self) -> str:
        return f"{self.name} - {self.address} - {self.distance}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a Store from a dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        return Store(
            id=str(d.get("id", "")),
            name=str(d.get("name", "")),
            address=str(d.get("address", "")),
            distance=str(d.get("distance", "")),
            lat=d.get("lat"),
            lng=d.get("lng"),
        )

    def to_dict(self):
        data = {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "distance": self.distance,
        }
        if self.lat is not None and self.lng is not None:
            data["lat"] = self.lat
            data["lng"] = self.lng
        return data
