from pydantic import BaseModel
from typing import Any, Optional


class ImpactReading(BaseModel):
    # Device firmware sends numbers, numeric strings or labels; the
    # normalizer decides what they mean, so nothing is rejected here.
    impact: Any = None
    light: Any = None
    g_force: Any = None
    light_raw: Any = None

    def missing_fields(self) -> list:
        return [name for name in ("impact", "light") if name not in self.model_fields_set]


class HardHatUpdate(BaseModel):
    nickname: Optional[str] = None
    owner_name: Optional[str] = None

    def changes(self) -> dict:
        """Only the fields the caller actually sent, explicit nulls included."""
        return {name: getattr(self, name) for name in ("nickname", "owner_name")
                if name in self.model_fields_set}
