from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

NO_LABEL = "(no label)"
NO_OWNER = "N/A"

class DocumentSummary(BaseModel):
    model_config = ConfigDict(extra="ignore")

    logical_id: str = Field(..., description="Logical document identifier, stable across versions.")
    hash_hex: str = Field(..., description="Hex-encoded content hash.")
    label: Optional[str] = None
    owner_wallet: Optional[str] = None
    local_path: Optional[str] = None
    arweave_tx: Optional[str] = Field(None, description="Arweave transaction anchoring the hash, if any.")

    def display_label(self) -> str:
        return self.label or NO_LABEL

    def display_owner(self) -> str:
        return self.owner_wallet or NO_OWNER
