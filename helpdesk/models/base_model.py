from datetime import datetime
from typing import Optional, Dict, Any

class BaseModel:
    # Attributes that hold related data and never go back to the database
    _related_fields: tuple = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional['BaseModel']:
        if not data:
            return None

        instance = cls()
        for key, value in data.items():
            attr_name = ''.join(['_' + c.lower() if c.isupper() else c for c in key])
            attr_name = attr_name.lstrip('_')

            # Handle datetime conversion
            if attr_name.endswith('_at') and value and isinstance(value, str):
                try:
                    value = datetime.fromisoformat(value.replace('Z', "+00:00"))
                except ValueError:
                    pass

            # Set attribute if it exists on the class
            if hasattr(instance, attr_name):
                setattr(instance, attr_name, value)

        return instance

    def to_dict(self) -> Dict[str, Any]:
        result = {}
        for attr_name, attr_value in self.__dict__.items():
            if attr_name.startswith('_') or attr_name in self._related_fields:
                continue

            # Convert datetime to ISO string
            if isinstance(attr_value, datetime):
                attr_value = attr_value.isoformat()

            result[attr_name] = attr_value

        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"{type(self).__name__}({fields})"
