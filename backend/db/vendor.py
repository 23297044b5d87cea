from dataclasses import dataclass


UNREGISTERED_VENDOR = "Unregistered vendor"


@dataclass
class Vendor:
    id: str
    name: str
    contact: str = ""
    phone: str = ""
    email: str = ""
    note: str = ""

    @property
    def to_schema(self):
        return {
            "id": self.id,
            "name": self.name,
            "contact": self.contact,
            "phone": self.phone,
            "email": self.email,
            "note": self.note,
        }
