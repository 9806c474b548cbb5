from pydantic import BaseModel, ConfigDict, Field

WHATSAPP_URL = "https://wa.me/{phone}"


class Supplier(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    contact: str
    phone: str # International format, digits only
    category: str
    reliability: int = Field(..., ge=0, le=100)

    @property
    def whatsapp_url(self) -> str:
        return WHATSAPP_URL.format(phone=self.phone)
