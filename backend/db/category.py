from dataclasses import dataclass


UNCATEGORIZED = "Uncategorized"


@dataclass
class Category:
    id: str
    name: str

    @property
    def to_schema(self):
        return {"id": self.id, "name": self.name}
