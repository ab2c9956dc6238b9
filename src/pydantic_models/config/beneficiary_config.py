from typing import Optional
from pydantic import BaseModel

class BeneficiaryConfig(BaseModel):
    name: Optional[str] = None
    iban: Optional[str] = None
    bic: Optional[str] = None
    character_set: int = 1
    version: int = 2
